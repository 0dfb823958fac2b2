"""
Subscription and statistics routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.roles import Role
from app.schemas.account import Actor, QuotaUpdate
from app.services.quota_service import QuotaLedger
from app.services.stats_service import StatsService
from app.utils.security import get_current_actor, require_roles
from app.utils.responses import success_response

router = APIRouter()

@router.get("/subscriptions")
async def list_subscriptions(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.SUPER_ADMIN, Role.ADMIN))
):
    """Quota usage of every event manager"""
    subscriptions = QuotaLedger.list_subscriptions(db, actor)
    return success_response(
        message="Subscriptions retrieved successfully",
        data=subscriptions
    )

@router.patch("/subscriptions/{manager_id}/quota")
async def update_quota(
    manager_id: str,
    payload: QuotaUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.SUPER_ADMIN, Role.ADMIN))
):
    """Change an event manager's event quota"""
    manager = QuotaLedger.update_quota(db, actor, manager_id, payload.event_quota)
    return success_response(
        message="Quota updated successfully",
        data={"id": manager.id, **QuotaLedger.usage(manager).model_dump()}
    )

@router.get("/stats")
async def get_stats(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Dashboard counters for the caller's role"""
    return success_response(
        message="Statistics retrieved successfully",
        data=StatsService.get_stats(db, actor)
    )

@router.get("/stats/overview")
async def get_overview(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.SUPER_ADMIN))
):
    """System-wide breakdown (super admin only)"""
    return success_response(
        message="Overview retrieved successfully",
        data=StatsService.get_overview(db, actor)
    )
