"""
Append-only audit trail of state-changing actions
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFound
from app.schemas.account import Actor
from app.schemas.event import AuditLogRecord
from app.services.authorizer import Authorizer
from app.services.repositories import AuditRepo, EventRepo

logger = logging.getLogger(__name__)

CREATE_EVENT = "create_event"
UPDATE_EVENT = "update_event"
DELETE_EVENT = "delete_event"
UPLOAD_GUESTS = "upload_guests"
DELETE_GUEST = "delete_guest"
ASSIGN_ORGANIZER = "assign_organizer"
REMOVE_ORGANIZER = "remove_organizer"
CHECK_IN = "check_in"


class AuditTrail:
    """Service for recording and reading audit entries"""

    @staticmethod
    def record(
        db: Session,
        event_id: str,
        actor_id: str,
        action: str,
        details: str = "",
        guest_id: Optional[str] = None,
    ) -> Optional[AuditLogRecord]:
        """Append one entry after a mutation has been committed.

        A failed write is logged and rolled back; the mutation it describes
        stays in place.
        """
        try:
            return AuditRepo.append(db, event_id, actor_id, action, details, guest_id)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to write audit entry {action} for event {event_id}")
            return None

    @staticmethod
    def list_for_event(db: Session, actor: Actor, event_id: str) -> List[AuditLogRecord]:
        """Entries for one event, newest first"""
        event = EventRepo.get(db, event_id)
        if event is None:
            raise NotFound("Event")
        Authorizer.require_audit_access(actor, event)
        return AuditRepo.list_by_event(db, event_id)
