"""
Audit log model. Rows are only ever inserted.
"""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from app.core.db import Base
from app.models.account import new_id

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    # No foreign key: entries outlive the event they describe
    event_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    action = Column(String(50), nullable=False)
    details = Column(Text, nullable=False, default="")
    guest_id = Column(String(36), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
