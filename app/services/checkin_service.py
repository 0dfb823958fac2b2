"""
Guest check-in service.

A guest moves from invited to checked in exactly once. Re-scanning a
checked-in guest reports the original check-in and changes nothing.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.errors import Forbidden
from app.core.roles import Role
from app.schemas.account import Actor
from app.schemas.guest import CheckInResult, CheckInStatus, GuestRecord
from app.services import audit_service
from app.services.audit_service import AuditTrail
from app.services.authorizer import Authorizer
from app.services.repositories import AccountRepo, AssignmentRepo, EventRepo, GuestRepo

logger = logging.getLogger(__name__)

UNKNOWN_ACTOR = "unknown"


class CheckInService:
    """Service for handling guest check-ins"""

    @staticmethod
    def _invalid() -> CheckInResult:
        return CheckInResult(status=CheckInStatus.INVALID, message="Guest not found")

    @staticmethod
    def _duplicate(db: Session, guest: GuestRecord) -> CheckInResult:
        checker = AccountRepo.get(db, guest.checked_in_by) if guest.checked_in_by else None
        return CheckInResult(
            status=CheckInStatus.DUPLICATE,
            message="This invitation has already been used",
            guest=guest,
            checked_in_at=guest.checked_in_at,
            checked_in_by=checker.name if checker else UNKNOWN_ACTOR,
        )

    @staticmethod
    def require_access(db: Session, actor: Actor, guest: GuestRecord) -> None:
        event = EventRepo.get(db, guest.event_id)
        if event is None:
            raise Forbidden()
        is_assigned = (
            actor.role == Role.ORGANIZER
            and AssignmentRepo.get(db, event.id, actor.id) is not None
        )
        if not Authorizer.can_check_in(actor, event, is_assigned):
            raise Forbidden()

    @staticmethod
    def check_in(db: Session, actor: Actor, guest_id: str) -> CheckInResult:
        """Check a guest in by id"""
        guest = GuestRepo.get(db, guest_id)
        if guest is None:
            return CheckInService._invalid()
        return CheckInService._transition(db, actor, guest)

    @staticmethod
    def check_in_by_token(db: Session, actor: Actor, qr_code: str) -> CheckInResult:
        """Check a guest in by the token embedded in their invitation"""
        guest = GuestRepo.get_by_qr_code(db, qr_code)
        if guest is None:
            return CheckInService._invalid()
        return CheckInService._transition(db, actor, guest)

    @staticmethod
    def _transition(db: Session, actor: Actor, guest: GuestRecord) -> CheckInResult:
        CheckInService.require_access(db, actor, guest)

        if guest.is_checked_in:
            logger.info(f"Duplicate check-in of guest {guest.id} by {actor.id}")
            return CheckInService._duplicate(db, guest)

        if not GuestRepo.mark_checked_in(db, guest.id, actor.id, datetime.utcnow()):
            # another scan flipped the flag between our read and our write
            logger.info(f"Lost check-in race for guest {guest.id} to a concurrent scan")
            current = GuestRepo.get(db, guest.id)
            if current is None:
                return CheckInService._invalid()
            return CheckInService._duplicate(db, current)

        updated = GuestRepo.get(db, guest.id)
        logger.info(f"Guest {guest.id} checked in by {actor.id}")
        AuditTrail.record(
            db, guest.event_id, actor.id, audit_service.CHECK_IN,
            f"Guest checked in: {guest.name}", guest_id=guest.id
        )
        return CheckInResult(
            status=CheckInStatus.SUCCESS,
            message="Guest checked in successfully",
            guest=updated,
            checked_in_at=updated.checked_in_at if updated else None,
            checked_in_by=actor.name or actor.id,
        )
