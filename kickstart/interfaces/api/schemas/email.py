"""Schemas for email notification endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from kickstart.domain.entities import EmailStatus, EmailType


class EmailCreate(BaseModel):
    """Payload used to queue an email."""

    recipient: EmailStr
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: EmailType = EmailType.GENERAL
    send_now: bool = False


class EmailRead(BaseModel):
    id: int
    recipient: str
    subject: str
    content: str
    type: EmailType
    status: EmailStatus
    created_at: datetime | None
    sent_at: datetime | None
    error: str | None

    model_config = ConfigDict(from_attributes=True)


class EmailRetryRead(BaseModel):
    retried: int
    sent: int
    failed: int


__all__ = ["EmailCreate", "EmailRead", "EmailRetryRead"]
