"""
Organizer-to-event assignment graph
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import Forbidden, NotFound, ValidationError
from app.core.roles import Role
from app.schemas.account import AccountRecord, Actor
from app.schemas.event import AssignmentRecord
from app.services import audit_service
from app.services.audit_service import AuditTrail
from app.services.authorizer import Authorizer
from app.services.repositories import AccountRepo, AssignmentRepo, EventRepo

logger = logging.getLogger(__name__)


class AssignmentService:
    """Service granting organizers check-in rights over events"""

    @staticmethod
    def assign(db: Session, actor: Actor, event_id: str, organizer_id: str) -> AssignmentRecord:
        """Assign an organizer; assigning an existing pair returns it unchanged"""
        event = Authorizer.require_event_owner(actor, EventRepo.get(db, event_id))

        organizer = AccountRepo.get(db, organizer_id)
        if organizer is None:
            raise NotFound("Organizer")
        if organizer.role != Role.ORGANIZER:
            raise ValidationError("Only organizer accounts can be assigned to events")

        assignment, created = AssignmentRepo.add(db, event.id, organizer.id)
        if created:
            logger.info(f"Organizer {organizer.id} assigned to event {event.id}")
            AuditTrail.record(
                db, event.id, actor.id, audit_service.ASSIGN_ORGANIZER,
                f"Organizer assigned: {organizer.name}"
            )
        return assignment

    @staticmethod
    def remove(db: Session, actor: Actor, event_id: str, organizer_id: str) -> None:
        """Remove an assignment. Removing a missing pair is not an error."""
        event = Authorizer.require_event_owner(actor, EventRepo.get(db, event_id))
        if AssignmentRepo.remove(db, event.id, organizer_id):
            logger.info(f"Organizer {organizer_id} removed from event {event.id}")
            AuditTrail.record(
                db, event.id, actor.id, audit_service.REMOVE_ORGANIZER,
                f"Organizer removed: {organizer_id}"
            )

    @staticmethod
    def is_assigned(db: Session, event_id: str, organizer_id: str) -> bool:
        return AssignmentRepo.get(db, event_id, organizer_id) is not None

    @staticmethod
    def organizers_for_event(db: Session, actor: Actor, event_id: str) -> List[AccountRecord]:
        event = EventRepo.get(db, event_id)
        if event is None:
            raise NotFound("Event")
        assigned = AssignmentRepo.event_ids_for_organizer(db, actor.id) if actor.role == Role.ORGANIZER else ()
        if not Authorizer.can_view_event(actor, event, assigned):
            raise Forbidden()

        organizers = []
        for organizer_id in AssignmentRepo.organizer_ids_for_event(db, event_id):
            account = AccountRepo.get(db, organizer_id)
            if account is not None:
                organizers.append(account)
        return organizers
