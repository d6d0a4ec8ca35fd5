"""Domain entity representing an audit entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ACTION_USER_CREATED = "USER_CREATED"
ACTION_USER_UPDATED = "USER_UPDATED"
ACTION_USER_DELETED = "USER_DELETED"
ACTION_LOGIN_ATTEMPT = "LOGIN_ATTEMPT"
ACTION_TASK_EXECUTED = "TASK_EXECUTED"


@dataclass
class AuditLog:
    """Captured information about an action performed on an entity."""

    id: int | None
    action: str
    entity_type: str
    entity_id: int | None = None
    user_id: int | None = None
    details: str | None = None
    created_at: datetime | None = None


__all__ = [
    "ACTION_LOGIN_ATTEMPT",
    "ACTION_TASK_EXECUTED",
    "ACTION_USER_CREATED",
    "ACTION_USER_DELETED",
    "ACTION_USER_UPDATED",
    "AuditLog",
]
