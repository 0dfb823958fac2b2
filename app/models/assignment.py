"""
Event organizer assignment model
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.account import new_id

class EventOrganizer(Base):
    __tablename__ = "event_organizers"

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    organizer_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    assigned_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="organizer_links")

    __table_args__ = (UniqueConstraint("event_id", "organizer_id", name="uq_event_organizer"),)
