"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.account import new_id

class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    date = Column(DateTime, nullable=False)
    start_time = Column(String(10), nullable=True)  # HH:MM
    end_time = Column(String(10), nullable=True)
    event_manager_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    guests = relationship("Guest", back_populates="event", cascade="all, delete-orphan")
    organizer_links = relationship("EventOrganizer", back_populates="event", cascade="all, delete-orphan")
