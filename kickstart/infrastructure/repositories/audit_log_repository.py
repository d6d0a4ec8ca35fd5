"""Persistence layer for audit log records."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from kickstart.domain.entities import AuditLog
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.models import AuditLogModel
from kickstart.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .paging import paginate

_SORTABLE = {
    "id": AuditLogModel.id,
    "action": AuditLogModel.action,
    "entity_type": AuditLogModel.entity_type,
    "created_at": AuditLogModel.created_at,
}


class AuditLogRepository:
    """Provide CRUD helpers for :class:`AuditLog` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: AuditLog) -> AuditLog:
        model = AuditLogModel()
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, entry_id: int) -> AuditLog | None:
        """Return an audit entry by its primary key, if present."""

        model = self.session.get(AuditLogModel, entry_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list(
        self, page_request: PageRequest, *, action: str | None = None
    ) -> Page[AuditLog]:
        """Return a page of audit entries, optionally filtered by action."""

        query = self.session.query(AuditLogModel)
        if action is not None:
            query = query.filter(AuditLogModel.action == action)
        return paginate(
            query, page_request, _SORTABLE, self._to_entity, tiebreaker=AuditLogModel.id
        )

    def list_by_action(self, action: str) -> Sequence[AuditLog]:
        query = (
            self.session.query(AuditLogModel)
            .filter(AuditLogModel.action == action)
            .order_by(AuditLogModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_entity(self, entity_type: str, entity_id: int) -> Sequence[AuditLog]:
        query = (
            self.session.query(AuditLogModel)
            .filter(AuditLogModel.entity_type == entity_type)
            .filter(AuditLogModel.entity_id == entity_id)
            .order_by(AuditLogModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_recent(self, since: datetime) -> Sequence[AuditLog]:
        query = (
            self.session.query(AuditLogModel)
            .filter(AuditLogModel.created_at >= ensure_app_naive_datetime(since))
            .order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_by_action_between(
        self, action: str, start: datetime, end: datetime
    ) -> int:
        """Count ``action`` entries created in ``[start, end)``."""

        return (
            self.session.query(func.count(AuditLogModel.id))
            .filter(AuditLogModel.action == action)
            .filter(AuditLogModel.created_at >= ensure_app_naive_datetime(start))
            .filter(AuditLogModel.created_at < ensure_app_naive_datetime(end))
            .scalar()
            or 0
        )

    def delete_created_before(self, cutoff: datetime) -> int:
        """Delete entries older than ``cutoff`` and return how many were removed."""

        deleted = (
            self.session.query(AuditLogModel)
            .filter(AuditLogModel.created_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _to_entity(model: AuditLogModel) -> AuditLog:
        return AuditLog(
            id=model.id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            user_id=model.user_id,
            details=model.details,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: AuditLogModel, entry: AuditLog) -> None:
        model.action = entry.action
        model.entity_type = entry.entity_type
        model.entity_id = entry.entity_id
        model.user_id = entry.user_id
        model.details = entry.details
        model.created_at = ensure_app_naive_datetime(
            entry.created_at or now_in_app_timezone()
        )


__all__ = ["AuditLogRepository"]
