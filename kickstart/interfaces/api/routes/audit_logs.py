"""Routes for recording and inspecting audit log entries."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kickstart.application.use_cases.audit_logs import (
    get_audit_log as get_audit_log_uc,
    list_audit_logs as list_audit_logs_uc,
    list_entity_audit_logs as list_entity_audit_logs_uc,
    purge_audit_logs as purge_audit_logs_uc,
    record_audit_event as record_audit_event_uc,
)
from kickstart.domain.entities import AuditLog
from kickstart.domain.pagination import PageRequest
from kickstart.infrastructure.database import get_db
from kickstart.interfaces.api.dependencies import get_current_auditor, get_page_request
from kickstart.interfaces.api.routes_helpers import http_error_from
from kickstart.interfaces.api.schemas import (
    AuditLogCreate,
    AuditLogPurgeRead,
    AuditLogRead,
    PageRead,
    to_page_read,
)

router = APIRouter(prefix="/audit-logs", tags=["audit_logs"])


def _audit_log_to_read_model(entry: AuditLog) -> AuditLogRead:
    return AuditLogRead.model_validate(entry)


@router.post("/", response_model=AuditLogRead, status_code=status.HTTP_201_CREATED)
def record_audit_event(
    entry_in: AuditLogCreate,
    db: Session = Depends(get_db),
    auditor_id: int | None = Depends(get_current_auditor),
) -> AuditLogRead:
    """Record an event reported by a client, such as a login attempt."""

    try:
        entry = record_audit_event_uc(
            db,
            action=entry_in.action,
            entity_type=entry_in.entity_type,
            entity_id=entry_in.entity_id,
            user_id=auditor_id,
            details=entry_in.details,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _audit_log_to_read_model(entry)


@router.get("/", response_model=PageRead[AuditLogRead])
def list_audit_logs(
    action: str | None = None,
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> PageRead[AuditLogRead]:
    """Return audit log entries optionally filtered by action."""

    try:
        page = list_audit_logs_uc(db, page_request, action=action)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_page_read(page, _audit_log_to_read_model)


@router.delete("/", response_model=AuditLogPurgeRead)
def purge_audit_logs(
    older_than_days: int = Query(..., ge=0),
    db: Session = Depends(get_db),
) -> AuditLogPurgeRead:
    """Delete entries older than ``older_than_days`` days."""

    try:
        deleted = purge_audit_logs_uc(db, older_than_days=older_than_days)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return AuditLogPurgeRead(deleted=deleted)


@router.get("/entity/{entity_type}/{entity_id}", response_model=list[AuditLogRead])
def list_entity_audit_logs(
    entity_type: str, entity_id: int, db: Session = Depends(get_db)
) -> list[AuditLogRead]:
    entries = list_entity_audit_logs_uc(db, entity_type=entity_type, entity_id=entity_id)
    return [_audit_log_to_read_model(entry) for entry in entries]


@router.get("/{entry_id}", response_model=AuditLogRead)
def read_audit_log(entry_id: int, db: Session = Depends(get_db)) -> AuditLogRead:
    """Return the audit log entry identified by ``entry_id``."""

    try:
        entry = get_audit_log_uc(db, entry_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _audit_log_to_read_model(entry)


__all__ = ["router"]
