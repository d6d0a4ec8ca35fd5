"""Persistence helpers for email notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from kickstart.domain.entities import EmailNotification, EmailStatus, EmailType
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.models import EmailNotificationModel
from kickstart.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .paging import paginate

_SORTABLE = {
    "id": EmailNotificationModel.id,
    "recipient": EmailNotificationModel.recipient,
    "subject": EmailNotificationModel.subject,
    "type": EmailNotificationModel.type,
    "status": EmailNotificationModel.status,
    "created_at": EmailNotificationModel.created_at,
    "sent_at": EmailNotificationModel.sent_at,
}


class EmailNotificationRepository:
    """Provide CRUD operations for :class:`EmailNotification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        page_request: PageRequest,
        *,
        status: EmailStatus | None = None,
        email_type: EmailType | None = None,
    ) -> Page[EmailNotification]:
        query = self.session.query(EmailNotificationModel)
        if status is not None:
            query = query.filter(EmailNotificationModel.status == status)
        if email_type is not None:
            query = query.filter(EmailNotificationModel.type == email_type)
        return paginate(
            query,
            page_request,
            _SORTABLE,
            self._to_entity,
            tiebreaker=EmailNotificationModel.id,
        )

    def list_by_status(self, status: EmailStatus) -> Sequence[EmailNotification]:
        query = (
            self.session.query(EmailNotificationModel)
            .filter(EmailNotificationModel.status == status)
            .order_by(EmailNotificationModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_type(self, email_type: EmailType) -> Sequence[EmailNotification]:
        query = (
            self.session.query(EmailNotificationModel)
            .filter(EmailNotificationModel.type == email_type)
            .order_by(EmailNotificationModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_with_status_older_than(
        self, status: EmailStatus, before: datetime
    ) -> Sequence[EmailNotification]:
        """Return emails in ``status`` that were created before ``before``."""

        query = (
            self.session.query(EmailNotificationModel)
            .filter(EmailNotificationModel.status == status)
            .filter(
                EmailNotificationModel.created_at < ensure_app_naive_datetime(before)
            )
            .order_by(EmailNotificationModel.created_at, EmailNotificationModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_sent_between(self, start: datetime, end: datetime) -> int:
        """Count emails whose ``sent_at`` falls in ``[start, end)``."""

        return (
            self.session.query(func.count(EmailNotificationModel.id))
            .filter(EmailNotificationModel.sent_at >= ensure_app_naive_datetime(start))
            .filter(EmailNotificationModel.sent_at < ensure_app_naive_datetime(end))
            .scalar()
            or 0
        )

    def get(self, notification_id: int) -> EmailNotification | None:
        model = self.session.get(EmailNotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: EmailNotification) -> EmailNotification:
        model = EmailNotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification: EmailNotification) -> EmailNotification:
        if notification.id is None:
            raise ValueError("Email notification id is required for updates")
        model = self.session.get(EmailNotificationModel, notification.id)
        if model is None:
            msg = f"Email notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: EmailNotificationModel,
        notification: EmailNotification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            )
        model.recipient = notification.recipient
        model.subject = notification.subject
        model.content = notification.content
        model.type = notification.type
        model.status = notification.status
        model.sent_at = ensure_app_naive_datetime(notification.sent_at)
        model.error = notification.error

    @staticmethod
    def _to_entity(model: EmailNotificationModel) -> EmailNotification:
        return EmailNotification(
            id=model.id,
            recipient=model.recipient,
            subject=model.subject,
            content=model.content,
            type=EmailType(model.type),
            status=EmailStatus(model.status),
            created_at=ensure_app_timezone(model.created_at),
            sent_at=ensure_app_timezone(model.sent_at),
            error=model.error,
        )


__all__ = ["EmailNotificationRepository"]
