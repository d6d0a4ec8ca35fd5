"""Use cases for queueing and delivering email notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import timedelta

from sqlalchemy.orm import Session

from kickstart.config import get_settings
from kickstart.domain.entities import EmailNotification, EmailStatus, EmailType
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure import email as email_gateway
from kickstart.infrastructure.repositories import EmailNotificationRepository
from kickstart.utils import now_in_app_timezone

from .errors import EntityNotFoundError

logger = logging.getLogger(__name__)


def queue_email(
    session: Session,
    *,
    recipient: str,
    subject: str,
    content: str,
    email_type: EmailType = EmailType.GENERAL,
    send_now: bool = False,
) -> EmailNotification:
    """Store a PENDING email and optionally attempt delivery right away."""

    if not recipient.strip() or "@" not in recipient:
        raise ValueError("Recipient must be a valid email address")
    if not subject.strip():
        raise ValueError("Subject must not be blank")

    notification = EmailNotificationRepository(session).create(
        EmailNotification(
            id=None,
            recipient=recipient.strip(),
            subject=subject.strip(),
            content=content,
            type=email_type,
            status=EmailStatus.PENDING,
            created_at=now_in_app_timezone(),
        )
    )
    if send_now:
        return _deliver(session, notification)
    return notification


def get_email(session: Session, notification_id: int) -> EmailNotification:
    notification = EmailNotificationRepository(session).get(notification_id)
    if notification is None:
        raise EntityNotFoundError("Email notification not found")
    return notification


def list_emails(
    session: Session,
    page_request: PageRequest,
    *,
    status: EmailStatus | None = None,
    email_type: EmailType | None = None,
) -> Page[EmailNotification]:
    return EmailNotificationRepository(session).list(
        page_request, status=status, email_type=email_type
    )


def deliver_email(session: Session, notification_id: int) -> EmailNotification:
    """Send the email identified by ``notification_id`` unless it was already sent."""

    notification = get_email(session, notification_id)
    if not notification.is_deliverable():
        return notification
    return _deliver(session, notification)


def retry_failed_emails(
    session: Session, *, older_than: timedelta | None = None
) -> Sequence[EmailNotification]:
    """Redeliver FAILED emails created before ``now - older_than``.

    Each candidate is flagged RETRYING before the new attempt so a concurrent
    run can tell it is already being handled.
    """

    if older_than is None:
        older_than = timedelta(minutes=get_settings().email_retry_after_minutes)
    repository = EmailNotificationRepository(session)
    cutoff = now_in_app_timezone() - older_than

    results: list[EmailNotification] = []
    for notification in repository.list_with_status_older_than(EmailStatus.FAILED, cutoff):
        retrying = repository.update(replace(notification, status=EmailStatus.RETRYING))
        results.append(_deliver(session, retrying))
    if results:
        logger.info("Retried %d failed email(s)", len(results))
    return results


def _deliver(session: Session, notification: EmailNotification) -> EmailNotification:
    result = email_gateway.send_email(
        notification.subject, notification.content, notification.recipient
    )
    if result.delivered:
        updated = replace(
            notification,
            status=EmailStatus.SENT,
            sent_at=now_in_app_timezone(),
            error=None,
        )
    elif not result.attempted:
        # Nothing was sent, so the email stays queued instead of joining the retry set.
        logger.info(
            "Email %s to %s left pending: %s",
            notification.id,
            notification.recipient,
            result.error,
        )
        updated = replace(notification, status=EmailStatus.PENDING, error=result.error)
    else:
        logger.warning(
            "Email %s to %s could not be delivered: %s",
            notification.id,
            notification.recipient,
            result.error,
        )
        updated = replace(notification, status=EmailStatus.FAILED, error=result.error)
    return EmailNotificationRepository(session).update(updated)


__all__ = [
    "deliver_email",
    "get_email",
    "list_emails",
    "queue_email",
    "retry_failed_emails",
]
