"""SQLAlchemy model for queued email notifications."""

from sqlalchemy import Column, DateTime, Enum, Integer, String, Text

from kickstart.domain.entities import EmailStatus, EmailType
from kickstart.infrastructure.database import Base


class EmailNotificationModel(Base):
    """Database representation of an outgoing email."""

    __tablename__ = "email_notifications"

    id = Column(Integer, primary_key=True, index=True)
    recipient = Column(String(255), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(
        Enum(EmailType, native_enum=False, length=20),
        nullable=False,
        default=EmailType.GENERAL,
    )
    status = Column(
        Enum(EmailStatus, native_enum=False, length=20),
        nullable=False,
        default=EmailStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, index=True)
    sent_at = Column(DateTime, nullable=True)
    error = Column(Text, nullable=True)


__all__ = ["EmailNotificationModel"]
