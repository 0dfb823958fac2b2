"""
Pydantic schemas package
"""

from .common import *
from .account import *
from .event import *
from .guest import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "Pagination",
    "AccountPublic",
    "AccountRecord",
    "AccountCreate",
    "AccountStatusUpdate",
    "LoginRequest",
    "Token",
    "Actor",
    "QuotaUpdate",
    "QuotaUsage",
    "Subscription",
    "EventRecord",
    "EventCreate",
    "EventUpdate",
    "AssignmentRecord",
    "AssignOrganizerRequest",
    "AuditLogRecord",
    "GuestRecord",
    "GuestRow",
    "GuestUpload",
    "CheckInByTokenRequest",
    "CheckInStatus",
    "CheckInResult",
]
