"""Explicit audit stamping invoked by every repository write path.

Auditable rows carry ``created_at``/``created_by`` and
``updated_at``/``updated_by`` columns. Creation fields are written once;
``updated_at`` only ever moves forward.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from kickstart.utils import ensure_app_naive_datetime, now_in_app_timezone


class AuditableModel(Protocol):
    created_at: datetime | None
    updated_at: datetime | None
    created_by: int | None
    updated_by: int | None


def _stamp(now: datetime | None) -> datetime:
    stamped = ensure_app_naive_datetime(now or now_in_app_timezone())
    if stamped is None:  # pragma: no cover - defensive guard
        raise RuntimeError("Failed to compute the audit timestamp")
    return stamped


def touch_for_create(
    model: AuditableModel, auditor_id: int | None, now: datetime | None = None
) -> None:
    """Populate the audit columns of a row that is about to be inserted."""

    stamp = _stamp(now)
    if model.created_at is None:
        model.created_at = stamp
    if model.created_by is None:
        model.created_by = auditor_id
    model.updated_at = model.created_at
    model.updated_by = auditor_id


def touch_for_update(
    model: AuditableModel, auditor_id: int | None, now: datetime | None = None
) -> None:
    """Refresh the modification columns of a row that is about to be updated."""

    stamp = _stamp(now)
    previous = model.updated_at
    model.updated_at = stamp if previous is None or stamp > previous else previous
    model.updated_by = auditor_id


__all__ = ["AuditableModel", "touch_for_create", "touch_for_update"]
