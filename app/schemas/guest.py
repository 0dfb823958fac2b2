"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel

from app.core.roles import GuestCategory

class GuestRecord(BaseModel):
    """Immutable snapshot of a stored guest"""
    id: str
    event_id: str
    name: str
    phone: str
    category: GuestCategory
    companions: int
    notes: str
    qr_code: str
    is_checked_in: bool
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True

class GuestRow(BaseModel):
    """One uploaded guest row. Values are loose and normalised on import."""
    name: Optional[Any] = None
    phone: Optional[Any] = None
    category: Optional[Any] = None
    companions: Optional[Any] = None
    notes: Optional[Any] = None

class GuestUpload(BaseModel):
    guests: List[GuestRow]

class CheckInByTokenRequest(BaseModel):
    qr_code: str

class CheckInStatus(str, Enum):
    SUCCESS = "success"
    DUPLICATE = "duplicate"
    INVALID = "invalid"

class CheckInResult(BaseModel):
    """Outcome of a check-in attempt. Duplicate and invalid are not errors."""
    status: CheckInStatus
    message: str
    guest: Optional[GuestRecord] = None
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None

    class Config:
        frozen = True
