"""Unit tests for the auditable record helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from kickstart.domain.entities import AuditableEntity, User

NOW = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


def test_is_created_by_matches_only_the_creator() -> None:
    entity = AuditableEntity(created_by=7)

    assert entity.is_created_by(7) is True
    assert entity.is_created_by(8) is False
    assert AuditableEntity().is_created_by(7) is False


def test_is_modified_recently_uses_a_24_hour_window_by_default() -> None:
    recent = AuditableEntity(updated_at=NOW - timedelta(hours=23, minutes=59))
    stale = AuditableEntity(updated_at=NOW - timedelta(hours=24, seconds=1))

    assert recent.is_modified_recently(now=NOW) is True
    assert stale.is_modified_recently(now=NOW) is False


def test_is_modified_recently_accepts_a_custom_window() -> None:
    entity = AuditableEntity(updated_at=NOW - timedelta(hours=3))

    assert entity.is_modified_recently(2, now=NOW) is False
    assert entity.is_modified_recently(4, now=NOW) is True


def test_is_modified_recently_is_false_without_updated_at() -> None:
    assert AuditableEntity().is_modified_recently() is False


def test_is_modified_recently_uses_the_current_time() -> None:
    entity = AuditableEntity(updated_at=datetime.now(tz=timezone.utc) - timedelta(minutes=5))

    assert entity.is_modified_recently() is True


def test_get_age_in_days_counts_whole_days() -> None:
    entity = AuditableEntity(created_at=NOW - timedelta(days=2, hours=23))

    assert entity.get_age_in_days(now=NOW) == 2


def test_get_age_in_days_is_zero_within_the_first_day_and_when_unset() -> None:
    assert AuditableEntity(created_at=NOW - timedelta(hours=23)).get_age_in_days(now=NOW) == 0
    assert AuditableEntity(created_at=NOW + timedelta(hours=5)).get_age_in_days(now=NOW) == 0
    assert AuditableEntity().get_age_in_days() == 0


def test_was_modified_after_creation_ignores_sub_second_differences() -> None:
    entity = AuditableEntity(
        created_at=NOW.replace(microsecond=100),
        updated_at=NOW.replace(microsecond=900_000),
    )

    assert entity.was_modified_after_creation() is False


def test_was_modified_after_creation_detects_a_one_second_difference() -> None:
    entity = AuditableEntity(created_at=NOW, updated_at=NOW + timedelta(seconds=1))

    assert entity.was_modified_after_creation() is True


def test_was_modified_after_creation_is_false_when_a_timestamp_is_missing() -> None:
    assert AuditableEntity(created_at=NOW).was_modified_after_creation() is False
    assert AuditableEntity(updated_at=NOW).was_modified_after_creation() is False


def test_user_inherits_the_helpers_and_formats_names() -> None:
    user = User(
        id=1,
        username="ada",
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        created_by=3,
        created_at=NOW,
        updated_at=NOW,
    )

    assert user.is_created_by(3)
    assert user.full_name == "Ada Lovelace"
    assert user.display_name == "Ada Lovelace (@ada)"
