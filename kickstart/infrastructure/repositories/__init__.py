"""Repository implementations for infrastructure layer."""

from .audit_log_repository import AuditLogRepository
from .daily_statistics_repository import DailyStatisticsRepository
from .email_notification_repository import EmailNotificationRepository
from .user_repository import UserRepository

__all__ = [
    "AuditLogRepository",
    "DailyStatisticsRepository",
    "EmailNotificationRepository",
    "UserRepository",
]
