"""ORM models used by the application infrastructure."""

from .audit_log import AuditLogModel
from .daily_statistics import DailyStatisticsModel
from .email_notification import EmailNotificationModel
from .user import UserModel

__all__ = [
    "AuditLogModel",
    "DailyStatisticsModel",
    "EmailNotificationModel",
    "UserModel",
]
