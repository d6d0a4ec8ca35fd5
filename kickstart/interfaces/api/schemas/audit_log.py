"""Schemas for audit log endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuditLogCreate(BaseModel):
    """Event reported by a client, e.g. a login attempt."""

    action: str = Field(..., min_length=1, max_length=50)
    entity_type: str = Field(..., min_length=1, max_length=50)
    entity_id: int | None = None
    details: str | None = None


class AuditLogRead(BaseModel):
    """Representation of an audit log entry returned by the API."""

    id: int
    action: str
    entity_type: str
    entity_id: int | None
    user_id: int | None
    details: str | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class AuditLogPurgeRead(BaseModel):
    deleted: int


__all__ = ["AuditLogCreate", "AuditLogPurgeRead", "AuditLogRead"]
