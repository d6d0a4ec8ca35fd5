from .audit_log import AuditLogCreate, AuditLogPurgeRead, AuditLogRead
from .email import EmailCreate, EmailRead, EmailRetryRead
from .page import PageRead, to_page_read
from .statistics import DailyStatisticsRead, RegistrationTotalRead
from .user import UserCreate, UserRead, UserUpdate

__all__ = [
    "AuditLogCreate",
    "AuditLogPurgeRead",
    "AuditLogRead",
    "DailyStatisticsRead",
    "EmailCreate",
    "EmailRead",
    "EmailRetryRead",
    "PageRead",
    "RegistrationTotalRead",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "to_page_read",
]
