"""Use cases for recording and inspecting audit log entries."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from sqlalchemy.orm import Session

from kickstart.domain.entities import AuditLog
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.repositories import AuditLogRepository
from kickstart.utils import now_in_app_timezone

from .errors import EntityNotFoundError

MAX_RETENTION_DAYS = 36500


def record_audit_event(
    session: Session,
    *,
    action: str,
    entity_type: str,
    entity_id: int | None = None,
    user_id: int | None = None,
    details: str | None = None,
) -> AuditLog:
    """Persist a new audit entry describing ``action``."""

    action = action.strip().upper()
    if not action:
        raise ValueError("Audit action must not be blank")
    if not entity_type.strip():
        raise ValueError("Audit entity type must not be blank")

    entry = AuditLog(
        id=None,
        action=action,
        entity_type=entity_type.strip(),
        entity_id=entity_id,
        user_id=user_id,
        details=details,
        created_at=now_in_app_timezone(),
    )
    return AuditLogRepository(session).create(entry)


def list_audit_logs(
    session: Session, page_request: PageRequest, *, action: str | None = None
) -> Page[AuditLog]:
    """Return a page of audit entries optionally filtered by action."""

    if action is not None:
        action = action.strip().upper() or None
    return AuditLogRepository(session).list(page_request, action=action)


def list_entity_audit_logs(
    session: Session, *, entity_type: str, entity_id: int
) -> Sequence[AuditLog]:
    """Return the history recorded for one entity, oldest first."""

    return AuditLogRepository(session).list_by_entity(entity_type, entity_id)


def get_audit_log(session: Session, entry_id: int) -> AuditLog:
    """Return an audit log entry identified by ``entry_id`` or raise an error."""

    entry = AuditLogRepository(session).get(entry_id)
    if entry is None:
        raise EntityNotFoundError("Audit log entry not found")
    return entry


def purge_audit_logs(session: Session, *, older_than_days: int) -> int:
    """Delete entries older than ``older_than_days`` and return the count."""

    if older_than_days < 0:
        raise ValueError("older_than_days must not be negative")
    if older_than_days > MAX_RETENTION_DAYS:
        raise ValueError(f"older_than_days must not exceed {MAX_RETENTION_DAYS}")
    cutoff = now_in_app_timezone() - timedelta(days=older_than_days)
    return AuditLogRepository(session).delete_created_before(cutoff)


__all__ = [
    "MAX_RETENTION_DAYS",
    "get_audit_log",
    "list_audit_logs",
    "list_entity_audit_logs",
    "purge_audit_logs",
    "record_audit_event",
]
