"""Domain entity representing the rollup of activity counters for one day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class DailyStatistics:
    """Aggregated counters; there is at most one row per calendar ``date``."""

    id: int | None
    date: date
    user_registrations: int = 0
    emails_sent: int = 0
    login_attempts: int = 0
    tasks_executed: int = 0
    generated_at: datetime | None = None


__all__ = ["DailyStatistics"]
