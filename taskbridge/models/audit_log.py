# taskbridge/models/audit_log.py
from sqlalchemy import Column, Integer, String, Text, DateTime
from taskbridge.database import Base
from taskbridge.utils.clock import utcnow


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
    action = Column(String(64), nullable=False, index=True)
    performed_by = Column(String, nullable=False)  # actor email, survives user deletion
    details = Column(Text, nullable=True)
