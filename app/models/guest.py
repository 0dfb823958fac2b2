"""
Guest model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.account import new_id

class Guest(Base):
    __tablename__ = "guests"

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
    category = Column(String(20), nullable=False, default="regular")  # regular, vip, media, sponsor
    companions = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=False, default="")
    qr_code = Column(String(64), unique=True, nullable=False, index=True)
    is_checked_in = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime, nullable=True)
    checked_in_by = Column(String(36), ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="guests")
