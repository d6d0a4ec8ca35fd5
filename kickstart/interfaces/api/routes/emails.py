"""Routes for queueing and delivering email notifications."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kickstart.application.use_cases.emails import (
    deliver_email as deliver_email_uc,
    get_email as get_email_uc,
    list_emails as list_emails_uc,
    queue_email as queue_email_uc,
    retry_failed_emails as retry_failed_emails_uc,
)
from kickstart.domain.entities import EmailNotification, EmailStatus, EmailType
from kickstart.domain.pagination import PageRequest
from kickstart.infrastructure.database import get_db
from kickstart.interfaces.api.dependencies import get_page_request
from kickstart.interfaces.api.routes_helpers import http_error_from
from kickstart.interfaces.api.schemas import (
    EmailCreate,
    EmailRead,
    EmailRetryRead,
    PageRead,
    to_page_read,
)

router = APIRouter(prefix="/emails", tags=["emails"])


def _to_read_model(notification: EmailNotification) -> EmailRead:
    return EmailRead.model_validate(notification)


@router.post("/", response_model=EmailRead, status_code=status.HTTP_201_CREATED)
def queue_email(email_in: EmailCreate, db: Session = Depends(get_db)) -> EmailRead:
    """Queue an email; with ``send_now`` the first delivery is attempted immediately."""

    try:
        notification = queue_email_uc(
            db,
            recipient=email_in.recipient,
            subject=email_in.subject,
            content=email_in.content,
            email_type=email_in.type,
            send_now=email_in.send_now,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(notification)


@router.get("/", response_model=PageRead[EmailRead])
def list_emails(
    status_filter: EmailStatus | None = Query(default=None, alias="status"),
    type_filter: EmailType | None = Query(default=None, alias="type"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> PageRead[EmailRead]:
    try:
        page = list_emails_uc(
            db, page_request, status=status_filter, email_type=type_filter
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_page_read(page, _to_read_model)


@router.post("/retry-failed", response_model=EmailRetryRead)
def retry_failed_emails(db: Session = Depends(get_db)) -> EmailRetryRead:
    """Redeliver failed emails that waited long enough."""

    results = retry_failed_emails_uc(db)
    sent = sum(1 for item in results if item.status is EmailStatus.SENT)
    return EmailRetryRead(retried=len(results), sent=sent, failed=len(results) - sent)


@router.get("/{notification_id}", response_model=EmailRead)
def read_email(notification_id: int, db: Session = Depends(get_db)) -> EmailRead:
    try:
        notification = get_email_uc(db, notification_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(notification)


@router.post("/{notification_id}/send", response_model=EmailRead)
def send_email(notification_id: int, db: Session = Depends(get_db)) -> EmailRead:
    """Attempt delivery of a queued or failed email."""

    try:
        notification = deliver_email_uc(db, notification_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(notification)


__all__ = ["router"]
