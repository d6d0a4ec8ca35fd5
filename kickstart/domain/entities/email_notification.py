"""Domain entity representing an outgoing email and its delivery state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EmailType(str, Enum):
    WELCOME = "WELCOME"
    PASSWORD_RESET = "PASSWORD_RESET"
    NOTIFICATION = "NOTIFICATION"
    GENERAL = "GENERAL"


class EmailStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"
    RETRYING = "RETRYING"


@dataclass
class EmailNotification:
    """Email queued for delivery to ``recipient``."""

    id: int | None
    recipient: str
    subject: str
    content: str
    type: EmailType = EmailType.GENERAL
    status: EmailStatus = EmailStatus.PENDING
    created_at: datetime | None = None
    sent_at: datetime | None = None
    error: str | None = None

    def is_deliverable(self) -> bool:
        """Return ``True`` while the email still has to reach its recipient."""

        return self.status is not EmailStatus.SENT


__all__ = ["EmailNotification", "EmailStatus", "EmailType"]
