"""
Database models package
"""

from .account import Account
from .event import Event
from .guest import Guest
from .assignment import EventOrganizer
from .audit_log import AuditLog

__all__ = ["Account", "Event", "Guest", "EventOrganizer", "AuditLog"]
