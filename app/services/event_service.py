"""
Event lifecycle service
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import Forbidden, NotFound, ValidationError
from app.core.roles import Role
from app.schemas.account import Actor
from app.schemas.event import EventCreate, EventRecord, EventUpdate
from app.services import audit_service
from app.services.audit_service import AuditTrail
from app.services.authorizer import Authorizer
from app.services.quota_service import QuotaLedger
from app.services.repositories import AssignmentRepo, EventRepo

logger = logging.getLogger(__name__)


class EventService:
    """Service for creating, reading and changing events"""

    @staticmethod
    def create_event(db: Session, actor: Actor, payload: EventCreate) -> EventRecord:
        Authorizer.require_role(actor, Role.EVENT_MANAGER)

        name = (payload.name or "").strip()
        if not name or payload.date is None:
            raise ValidationError("Event name and date are required")

        QuotaLedger.check_can_create_event(db, actor.id)

        fields = payload.model_dump(exclude={"name"})
        event = EventRepo.create(db, actor.id, {"name": name, **fields})
        logger.info(f"Event {event.id} created by {actor.id}")

        AuditTrail.record(db, event.id, actor.id, audit_service.CREATE_EVENT, f"Event created: {event.name}")
        return event

    @staticmethod
    def list_events(db: Session, actor: Actor) -> List[EventRecord]:
        if actor.role == Role.EVENT_MANAGER:
            return EventRepo.list_by_manager(db, actor.id)
        if actor.role == Role.ORGANIZER:
            return EventService.events_for_organizer(db, actor.id)
        return EventRepo.list_all(db)

    @staticmethod
    def events_for_organizer(db: Session, organizer_id: str) -> List[EventRecord]:
        """Assigned events that are still active"""
        events = []
        for event_id in AssignmentRepo.event_ids_for_organizer(db, organizer_id):
            event = EventRepo.get(db, event_id)
            if event is not None and event.is_active:
                events.append(event)
        return sorted(events, key=lambda e: e.date, reverse=True)

    @staticmethod
    def get_event(db: Session, actor: Actor, event_id: str) -> EventRecord:
        event = EventRepo.get(db, event_id)
        if event is None:
            raise NotFound("Event")
        assigned = AssignmentRepo.event_ids_for_organizer(db, actor.id) if actor.role == Role.ORGANIZER else ()
        if not Authorizer.can_view_event(actor, event, assigned):
            raise Forbidden()
        return event

    @staticmethod
    def require_owned(db: Session, actor: Actor, event_id: str) -> EventRecord:
        return Authorizer.require_event_owner(actor, EventRepo.get(db, event_id))

    @staticmethod
    def update_event(db: Session, actor: Actor, event_id: str, payload: EventUpdate) -> EventRecord:
        event = EventRepo.get(db, event_id)
        if event is None:
            raise NotFound("Event")
        Authorizer.require_event_owner(actor, event)

        fields = payload.model_dump(exclude_unset=True)
        if "name" in fields:
            fields["name"] = (fields["name"] or "").strip()
            if not fields["name"]:
                raise ValidationError("Event name cannot be empty")
        if "date" in fields and fields["date"] is None:
            raise ValidationError("Event date cannot be empty")
        if "is_active" in fields and fields["is_active"] is None:
            del fields["is_active"]

        updated = EventRepo.update(db, event_id, **fields)
        if fields:
            AuditTrail.record(
                db, event_id, actor.id, audit_service.UPDATE_EVENT,
                f"Event updated: {', '.join(sorted(fields))}"
            )
        return updated

    @staticmethod
    def delete_event(db: Session, actor: Actor, event_id: str) -> None:
        event = EventRepo.get(db, event_id)
        if event is None:
            raise NotFound("Event")
        Authorizer.require_event_owner(actor, event)

        EventRepo.delete(db, event_id)
        logger.info(f"Event {event_id} deleted by {actor.id}")
        AuditTrail.record(db, event_id, actor.id, audit_service.DELETE_EVENT, f"Event deleted: {event.name}")
