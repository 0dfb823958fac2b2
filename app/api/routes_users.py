"""
Account management routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.roles import Role
from app.schemas.account import AccountCreate, AccountStatusUpdate, Actor
from app.services.account_service import AccountService
from app.utils.security import get_current_actor
from app.utils.responses import success_response

router = APIRouter()

def _list(db: Session, actor: Actor, role: Role):
    accounts = AccountService.list_accounts(db, actor, role)
    return success_response(
        message="Accounts retrieved successfully",
        data=[a.to_public() for a in accounts]
    )

@router.get("/admins")
async def list_admins(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """List admins (super admin only)"""
    return _list(db, actor, Role.ADMIN)

@router.get("/event-managers")
async def list_event_managers(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """List event managers (admins and super admin)"""
    return _list(db, actor, Role.EVENT_MANAGER)

@router.get("/organizers")
async def list_organizers(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """List organizers; event managers only see their own"""
    return _list(db, actor, Role.ORGANIZER)

# Plain def: bcrypt runs in the threadpool, off the event loop
@router.post("")
def create_account(
    payload: AccountCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Create an account one level below the caller"""
    account = AccountService.create_account(db, actor, payload)
    return success_response(
        message="Account created successfully",
        data=account.to_public(),
        status_code=201
    )

@router.patch("/{account_id}/status")
async def set_account_status(
    account_id: str,
    payload: AccountStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Activate or deactivate an account"""
    account = AccountService.set_active(db, actor, account_id, payload.is_active)
    return success_response(
        message="Account updated successfully",
        data=account.to_public()
    )
