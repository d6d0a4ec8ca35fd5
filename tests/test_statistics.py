"""Tests for the daily statistics rollup."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from kickstart.application.use_cases.errors import EntityNotFoundError
from kickstart.application.use_cases.statistics import (
    generate_daily_statistics,
    get_daily_statistics,
    list_daily_statistics_between,
    sum_user_registrations,
)
from kickstart.domain.entities import (
    ACTION_LOGIN_ATTEMPT,
    ACTION_TASK_EXECUTED,
    AuditLog,
    EmailNotification,
    EmailStatus,
    User,
)
from kickstart.infrastructure.repositories import (
    AuditLogRepository,
    EmailNotificationRepository,
    UserRepository,
)
from kickstart.utils import now_in_app_timezone

DAY = date(2024, 6, 1)
NOON = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _seed_activity(session) -> None:
    users = UserRepository(session)
    for index, created_at in enumerate(
        (NOON, NOON + timedelta(hours=11, minutes=59), NOON + timedelta(hours=12))
    ):
        users.create(
            User(
                id=None,
                username=f"user{index}",
                email=f"user{index}@example.com",
                first_name="Test",
                last_name="User",
                created_at=created_at,
            )
        )
    EmailNotificationRepository(session).create(
        EmailNotification(
            id=None,
            recipient="user0@example.com",
            subject="Welcome",
            content="x",
            status=EmailStatus.SENT,
            created_at=NOON,
            sent_at=NOON + timedelta(minutes=1),
        )
    )
    AuditLogRepository(session).create(
        AuditLog(id=None, action=ACTION_LOGIN_ATTEMPT, entity_type="User", created_at=NOON)
    )


def test_generate_counts_activity_within_the_day(session) -> None:
    _seed_activity(session)

    statistics = generate_daily_statistics(session, DAY)

    assert statistics.date == DAY
    assert statistics.user_registrations == 2
    assert statistics.emails_sent == 1
    assert statistics.login_attempts == 1
    assert statistics.tasks_executed == 0
    assert statistics.generated_at is not None


def test_generate_records_the_run_as_an_executed_task(session) -> None:
    today = now_in_app_timezone().date()

    first = generate_daily_statistics(session, today, triggered_by=3)
    second = generate_daily_statistics(session, today)

    assert first.id == second.id
    assert second.tasks_executed == 1
    runs = AuditLogRepository(session).list_by_action(ACTION_TASK_EXECUTED)
    assert len(runs) == 2
    assert runs[0].user_id == 3


def test_lookup_range_and_registration_total(session) -> None:
    _seed_activity(session)
    generate_daily_statistics(session, DAY)
    generate_daily_statistics(session, DAY + timedelta(days=1))

    assert get_daily_statistics(session, DAY).user_registrations == 2
    rows = list_daily_statistics_between(session, DAY, DAY + timedelta(days=1))
    assert [row.date for row in rows] == [DAY + timedelta(days=1), DAY]
    assert sum_user_registrations(session, DAY, DAY + timedelta(days=1)) == 3


def test_missing_day_and_inverted_range_raise(session) -> None:
    with pytest.raises(EntityNotFoundError):
        get_daily_statistics(session, DAY)
    with pytest.raises(ValueError):
        sum_user_registrations(session, DAY, DAY - timedelta(days=1))
