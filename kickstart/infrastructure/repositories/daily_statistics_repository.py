"""Persistence layer for daily statistic rollups."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from kickstart.domain.entities import DailyStatistics
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.models import DailyStatisticsModel
from kickstart.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .paging import paginate

_SORTABLE = {
    "id": DailyStatisticsModel.id,
    "date": DailyStatisticsModel.date,
    "user_registrations": DailyStatisticsModel.user_registrations,
    "emails_sent": DailyStatisticsModel.emails_sent,
    "login_attempts": DailyStatisticsModel.login_attempts,
    "tasks_executed": DailyStatisticsModel.tasks_executed,
    "generated_at": DailyStatisticsModel.generated_at,
}


class DailyStatisticsRepository:
    """Store one rollup row per calendar date."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_date(self, day: date) -> DailyStatistics | None:
        model = self._get_model_by_date(day)
        return self._to_entity(model) if model else None

    def list(self, page_request: PageRequest) -> Page[DailyStatistics]:
        query = self.session.query(DailyStatisticsModel)
        return paginate(
            query, page_request, _SORTABLE, self._to_entity, tiebreaker=DailyStatisticsModel.id
        )

    def list_between(self, start: date, end: date) -> Sequence[DailyStatistics]:
        """Return rollups with ``start <= date <= end``, newest first."""

        query = (
            self.session.query(DailyStatisticsModel)
            .filter(DailyStatisticsModel.date.between(start, end))
            .order_by(DailyStatisticsModel.date.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def sum_user_registrations_between(self, start: date, end: date) -> int:
        total = (
            self.session.query(func.sum(DailyStatisticsModel.user_registrations))
            .filter(DailyStatisticsModel.date.between(start, end))
            .scalar()
        )
        return int(total or 0)

    def save(self, statistics: DailyStatistics) -> DailyStatistics:
        """Insert the rollup for ``statistics.date`` or overwrite the existing one."""

        model = self._get_model_by_date(statistics.date)
        if model is None:
            model = DailyStatisticsModel(date=statistics.date)
        model.user_registrations = statistics.user_registrations
        model.emails_sent = statistics.emails_sent
        model.login_attempts = statistics.login_attempts
        model.tasks_executed = statistics.tasks_executed
        model.generated_at = ensure_app_naive_datetime(
            statistics.generated_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model_by_date(self, day: date) -> DailyStatisticsModel | None:
        return (
            self.session.query(DailyStatisticsModel)
            .filter(DailyStatisticsModel.date == day)
            .first()
        )

    @staticmethod
    def _to_entity(model: DailyStatisticsModel) -> DailyStatistics:
        return DailyStatistics(
            id=model.id,
            date=model.date,
            user_registrations=model.user_registrations,
            emails_sent=model.emails_sent,
            login_attempts=model.login_attempts,
            tasks_executed=model.tasks_executed,
            generated_at=ensure_app_timezone(model.generated_at),
        )


__all__ = ["DailyStatisticsRepository"]
