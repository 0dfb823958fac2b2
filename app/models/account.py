"""
Account model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey

from app.core.db import Base

def new_id() -> str:
    return str(uuid.uuid4())

class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, index=True)  # super_admin, admin, event_manager, organizer
    is_active = Column(Boolean, nullable=False, default=True)
    created_by_id = Column(String(36), ForeignKey("accounts.id"), nullable=True, index=True)
    event_quota = Column(Integer, nullable=False, default=5)
    events_used = Column(Integer, nullable=False, default=0)  # never decremented
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
