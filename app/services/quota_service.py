"""
Event quota ledger for event managers
"""

import logging
from collections import Counter
from typing import List

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFound, QuotaExceeded, ValidationError
from app.core.roles import STAFF_ROLES, Role
from app.schemas.account import AccountRecord, Actor, QuotaUsage, Subscription
from app.services.account_service import AccountService
from app.services.authorizer import Authorizer
from app.services.repositories import AccountRepo, EventRepo, GuestRepo

logger = logging.getLogger(__name__)


class QuotaLedger:
    """Quota, consumption and remaining balance per event manager"""

    @staticmethod
    def usage(account: AccountRecord) -> QuotaUsage:
        return QuotaUsage(
            event_quota=account.event_quota,
            events_used=account.events_used,
            events_remaining=max(0, account.event_quota - account.events_used),
        )

    @staticmethod
    def check_can_create_event(db: Session, manager_id: str) -> None:
        """Advisory unless ENFORCE_EVENT_QUOTA is set"""
        manager = AccountRepo.get(db, manager_id)
        if manager is None:
            raise NotFound("Account")
        if QuotaLedger.usage(manager).events_remaining > 0:
            return
        if settings.ENFORCE_EVENT_QUOTA:
            raise QuotaExceeded()
        logger.warning(
            f"Event manager {manager_id} is creating an event past quota "
            f"({manager.events_used}/{manager.event_quota})"
        )

    @staticmethod
    def update_quota(db: Session, actor: Actor, manager_id: str, event_quota: int) -> AccountRecord:
        Authorizer.require_role(actor, *STAFF_ROLES)
        manager = AccountRepo.get(db, manager_id)
        if manager is None:
            raise NotFound("Event manager")
        if manager.role != Role.EVENT_MANAGER:
            raise ValidationError("Quota applies to event managers only")
        AccountService.validate_quota(event_quota)
        updated = AccountRepo.update(db, manager_id, event_quota=event_quota)
        logger.info(f"Quota of {manager_id} set to {event_quota} by {actor.id}")
        return updated

    @staticmethod
    def list_subscriptions(db: Session, actor: Actor) -> List[Subscription]:
        Authorizer.require_role(actor, *STAFF_ROLES)
        managers = AccountRepo.list_by_role(db, Role.EVENT_MANAGER)

        events = EventRepo.list_all(db)
        event_owner = {e.id: e.event_manager_id for e in events}
        guests_per_manager = Counter(event_owner[g.event_id] for g in GuestRepo.list_by_events(db, list(event_owner)))

        return [
            Subscription(
                id=m.id,
                name=m.name,
                username=m.username,
                is_active=m.is_active,
                total_guests=guests_per_manager.get(m.id, 0),
                created_at=m.created_at,
                **QuotaLedger.usage(m).model_dump(),
            )
            for m in managers
        ]
