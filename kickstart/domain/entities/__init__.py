"""Domain entities exposed by the application."""

from .audit_log import (
    ACTION_LOGIN_ATTEMPT,
    ACTION_TASK_EXECUTED,
    ACTION_USER_CREATED,
    ACTION_USER_DELETED,
    ACTION_USER_UPDATED,
    AuditLog,
)
from .auditable import AuditableEntity
from .daily_statistics import DailyStatistics
from .email_notification import EmailNotification, EmailStatus, EmailType
from .user import User

__all__ = [
    "ACTION_LOGIN_ATTEMPT",
    "ACTION_TASK_EXECUTED",
    "ACTION_USER_CREATED",
    "ACTION_USER_DELETED",
    "ACTION_USER_UPDATED",
    "AuditLog",
    "AuditableEntity",
    "DailyStatistics",
    "EmailNotification",
    "EmailStatus",
    "EmailType",
    "User",
]
