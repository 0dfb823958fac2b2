"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class EventRecord(BaseModel):
    """Immutable snapshot of a stored event"""
    id: str
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    date: datetime
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    event_manager_id: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True

class EventCreate(BaseModel):
    """Schema for creating an event. Name and date are checked by the service."""
    name: Optional[str] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

class EventUpdate(BaseModel):
    """Schema for updating an event"""
    name: Optional[str] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_active: Optional[bool] = None

class AssignmentRecord(BaseModel):
    id: str
    event_id: str
    organizer_id: str
    assigned_at: datetime

    class Config:
        from_attributes = True
        frozen = True

class AssignOrganizerRequest(BaseModel):
    organizer_id: str

class AuditLogRecord(BaseModel):
    """Immutable snapshot of an audit entry"""
    id: str
    event_id: str
    user_id: str
    action: str
    details: str
    guest_id: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
        frozen = True
