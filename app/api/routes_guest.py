"""
Door-side guest routes - check-in and organizer views
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.roles import Role
from app.schemas.account import Actor
from app.schemas.guest import CheckInByTokenRequest, CheckInResult, CheckInStatus
from app.services.checkin_service import CheckInService
from app.services.event_service import EventService
from app.services.guest_service import GuestService
from app.utils.security import require_roles
from app.utils.responses import success_response, error_response

router = APIRouter()

def checkin_response(result: CheckInResult):
    """Success and duplicate are both answered; invalid is a 404"""
    if result.status == CheckInStatus.INVALID:
        return error_response(
            message=result.message,
            error_code=result.status.value,
            status_code=404
        )
    return success_response(
        message=result.message,
        data={
            "status": result.status.value,
            "guest": result.guest,
            "checked_in_at": result.checked_in_at,
            "checked_in_by": result.checked_in_by,
        }
    )

@router.post("/guests/check-in")
async def check_in_by_token(
    payload: CheckInByTokenRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.ORGANIZER, Role.EVENT_MANAGER))
):
    """Check in the guest holding a scanned invitation code"""
    result = CheckInService.check_in_by_token(db, actor, payload.qr_code)
    return checkin_response(result)

@router.post("/guests/{guest_id}/check-in")
async def check_in_guest(
    guest_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.ORGANIZER, Role.EVENT_MANAGER))
):
    """Check in a guest by id"""
    result = CheckInService.check_in(db, actor, guest_id)
    return checkin_response(result)

@router.get("/guests/by-code/{qr_code}")
async def lookup_guest(
    qr_code: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.ORGANIZER, Role.EVENT_MANAGER, Role.ADMIN, Role.SUPER_ADMIN))
):
    """Look up a guest by invitation code without checking them in"""
    guest = GuestService.get_guest_by_token(db, actor, qr_code)
    return success_response(message="Guest information found", data=guest)

@router.delete("/guests/{guest_id}")
async def delete_guest(
    guest_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Remove a guest from its event"""
    GuestService.delete_guest(db, actor, guest_id)
    return success_response(message="Guest deleted successfully", data={"deleted_guest_id": guest_id})

@router.get("/organizer/events")
async def organizer_events(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.ORGANIZER, Role.EVENT_MANAGER))
):
    """Events the caller can check guests in for"""
    events = EventService.list_events(db, actor)
    return success_response(message="Events retrieved successfully", data=events)
