"""SQLAlchemy model for daily activity rollups."""

from sqlalchemy import Column, Date, DateTime, Integer

from kickstart.infrastructure.database import Base


class DailyStatisticsModel(Base):
    """Database representation of one day of aggregated counters."""

    __tablename__ = "daily_statistics"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    user_registrations = Column(Integer, nullable=False, default=0)
    emails_sent = Column(Integer, nullable=False, default=0)
    login_attempts = Column(Integer, nullable=False, default=0)
    tasks_executed = Column(Integer, nullable=False, default=0)
    generated_at = Column(DateTime, nullable=False)


__all__ = ["DailyStatisticsModel"]
