"""Utility helpers for reusable functionality."""

from .datetime import (
    day_bounds,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
)

__all__ = [
    "day_bounds",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
]
