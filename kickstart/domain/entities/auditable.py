"""Base shape shared by records that carry creation and modification metadata."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

_ONE_DAY = timedelta(days=1)


def _now_like(reference: datetime, now: datetime | None) -> datetime:
    if now is not None:
        return now
    return datetime.now(tz=reference.tzinfo)


@dataclass(kw_only=True)
class AuditableEntity:
    """Creation/modification timestamps and the ids of the acting users.

    The fields are populated by the persistence layer when a record is
    written; the helpers below only read them and fall back to a neutral
    answer while a field is still unset.
    """

    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: int | None = None
    updated_by: int | None = None

    def is_created_by(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` created this record."""

        return self.created_by == user_id

    def is_modified_recently(
        self, hours: float = 24, *, now: datetime | None = None
    ) -> bool:
        """Return ``True`` when the last update happened within ``hours``."""

        if self.updated_at is None:
            return False
        threshold = _now_like(self.updated_at, now) - timedelta(hours=hours)
        return self.updated_at > threshold

    def get_age_in_days(self, *, now: datetime | None = None) -> int:
        """Return the whole days elapsed since creation, ``0`` when unknown."""

        if self.created_at is None:
            return 0
        elapsed = _now_like(self.created_at, now) - self.created_at
        # Whole days, truncated toward zero.
        return int(elapsed / _ONE_DAY)

    def was_modified_after_creation(self) -> bool:
        """Return ``True`` when the record changed after the second it was created."""

        if self.created_at is None or self.updated_at is None:
            return False
        return self.created_at.replace(microsecond=0) != self.updated_at.replace(
            microsecond=0
        )


__all__ = ["AuditableEntity"]
