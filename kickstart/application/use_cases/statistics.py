"""Use cases for the daily activity rollups."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from kickstart.domain.entities import (
    ACTION_LOGIN_ATTEMPT,
    ACTION_TASK_EXECUTED,
    DailyStatistics,
)
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.repositories import (
    AuditLogRepository,
    DailyStatisticsRepository,
    EmailNotificationRepository,
    UserRepository,
)
from kickstart.utils import day_bounds, now_in_app_timezone

from .audit_logs import record_audit_event
from .errors import EntityNotFoundError

logger = logging.getLogger(__name__)


def generate_daily_statistics(
    session: Session, day: date, *, triggered_by: int | None = None
) -> DailyStatistics:
    """Compute the counters for ``day`` and store them as its rollup.

    Running it again for the same day overwrites the previous row. The run is
    itself recorded as an executed task, which counts towards the rollup the
    next time the same day is generated.
    """

    start, end = day_bounds(day)
    audit_logs = AuditLogRepository(session)

    statistics = DailyStatistics(
        id=None,
        date=day,
        user_registrations=UserRepository(session).count_created_between(start, end),
        emails_sent=EmailNotificationRepository(session).count_sent_between(start, end),
        login_attempts=audit_logs.count_by_action_between(ACTION_LOGIN_ATTEMPT, start, end),
        tasks_executed=audit_logs.count_by_action_between(ACTION_TASK_EXECUTED, start, end),
        generated_at=now_in_app_timezone(),
    )
    saved = DailyStatisticsRepository(session).save(statistics)

    record_audit_event(
        session,
        action=ACTION_TASK_EXECUTED,
        entity_type="DailyStatistics",
        entity_id=saved.id,
        user_id=triggered_by,
        details=f"date={day.isoformat()}",
    )
    logger.info(
        "Generated statistics for %s: %d registrations, %d emails sent",
        day,
        saved.user_registrations,
        saved.emails_sent,
    )
    return saved


def get_daily_statistics(session: Session, day: date) -> DailyStatistics:
    statistics = DailyStatisticsRepository(session).get_by_date(day)
    if statistics is None:
        raise EntityNotFoundError(f"No statistics generated for {day.isoformat()}")
    return statistics


def list_daily_statistics(
    session: Session, page_request: PageRequest
) -> Page[DailyStatistics]:
    return DailyStatisticsRepository(session).list(page_request)


def list_daily_statistics_between(
    session: Session, start: date, end: date
) -> Sequence[DailyStatistics]:
    """Return the rollups from ``start`` to ``end`` inclusive, newest first."""

    _ensure_range(start, end)
    return DailyStatisticsRepository(session).list_between(start, end)


def sum_user_registrations(session: Session, start: date, end: date) -> int:
    _ensure_range(start, end)
    return DailyStatisticsRepository(session).sum_user_registrations_between(start, end)


def _ensure_range(start: date, end: date) -> None:
    if start > end:
        raise ValueError("start must not be after end")


__all__ = [
    "generate_daily_statistics",
    "get_daily_statistics",
    "list_daily_statistics",
    "list_daily_statistics_between",
    "sum_user_registrations",
]
