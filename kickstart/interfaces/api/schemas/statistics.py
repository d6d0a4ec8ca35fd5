"""Schemas for daily statistic endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class DailyStatisticsRead(BaseModel):
    id: int
    date: date
    user_registrations: int
    emails_sent: int
    login_attempts: int
    tasks_executed: int
    generated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class RegistrationTotalRead(BaseModel):
    start: date
    end: date
    user_registrations: int


__all__ = ["DailyStatisticsRead", "RegistrationTotalRead"]
