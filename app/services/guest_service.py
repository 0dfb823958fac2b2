"""
Guest list management
"""

import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from app.core.errors import Forbidden, NotFound
from app.core.roles import GuestCategory, Role
from app.schemas.account import Actor
from app.schemas.event import EventRecord
from app.schemas.guest import GuestRecord, GuestRow
from app.services import audit_service
from app.services.audit_service import AuditTrail
from app.services.authorizer import Authorizer
from app.services.repositories import AssignmentRepo, EventRepo, GuestRepo

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _companions(value: Any) -> int:
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


class GuestService:
    """Service for guest uploads, listing and removal"""

    @staticmethod
    def normalize_row(row: Union[GuestRow, Dict[str, Any]]) -> Dict[str, Any]:
        """Row-level data never fails: blanks become empty strings, bad categories become regular"""
        if isinstance(row, GuestRow):
            row = row.model_dump()
        return {
            "name": _text(row.get("name")),
            "phone": _text(row.get("phone")),
            "category": GuestCategory.normalize(row.get("category")).value,
            "companions": _companions(row.get("companions")),
            "notes": _text(row.get("notes")),
        }

    @staticmethod
    def upload_guests(
        db: Session,
        actor: Actor,
        event_id: str,
        rows: Iterable[Union[GuestRow, Dict[str, Any]]],
    ) -> Tuple[int, List[GuestRecord]]:
        event = Authorizer.require_event_owner(actor, EventRepo.get(db, event_id))

        to_create = []
        for row in rows:
            data = GuestService.normalize_row(row)
            data["event_id"] = event.id
            data["qr_code"] = str(uuid.uuid4())
            to_create.append(data)

        created = GuestRepo.create_many(db, to_create)
        logger.info(f"{len(created)} guests uploaded to event {event.id} by {actor.id}")
        AuditTrail.record(db, event.id, actor.id, audit_service.UPLOAD_GUESTS, f"{len(created)} guests uploaded")
        return len(created), created

    @staticmethod
    def require_view(db: Session, actor: Actor, event_id: str) -> EventRecord:
        event = EventRepo.get(db, event_id)
        if event is None:
            raise NotFound("Event")
        assigned = AssignmentRepo.event_ids_for_organizer(db, actor.id) if actor.role == Role.ORGANIZER else ()
        if not Authorizer.can_view_event(actor, event, assigned):
            raise Forbidden()
        return event

    @staticmethod
    def list_guests(
        db: Session,
        actor: Actor,
        event_id: str,
        search: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[GuestRecord], int]:
        GuestService.require_view(db, actor, event_id)
        return GuestRepo.list_by_event(db, event_id, search=search, offset=offset, limit=limit)

    @staticmethod
    def get_guest_by_token(db: Session, actor: Actor, qr_code: str) -> GuestRecord:
        guest = GuestRepo.get_by_qr_code(db, qr_code)
        if guest is None:
            raise NotFound("Guest")
        GuestService.require_view(db, actor, guest.event_id)
        return guest

    @staticmethod
    def delete_guest(db: Session, actor: Actor, guest_id: str) -> None:
        guest = GuestRepo.get(db, guest_id)
        if guest is None:
            raise NotFound("Guest")
        Authorizer.require_event_owner(actor, EventRepo.get(db, guest.event_id))
        GuestRepo.delete(db, guest_id)
        AuditTrail.record(
            db, guest.event_id, actor.id, audit_service.DELETE_GUEST,
            f"Guest deleted: {guest.name}", guest_id=guest.id
        )
