"""SQLAlchemy model for audit records."""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from kickstart.infrastructure.database import Base


class AuditLogModel(Base):
    """Database representation of audit events."""

    __tablename__ = "audit_logs"
    __table_args__ = (Index("ix_audit_logs_entity", "entity_type", "entity_id"),)

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String(50), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(Integer, nullable=True)
    user_id = Column(Integer, nullable=True)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, index=True)


__all__ = ["AuditLogModel"]
