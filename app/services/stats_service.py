"""
Role-scoped statistics
"""

from collections import Counter
from datetime import datetime, time
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.roles import GuestCategory, Role
from app.schemas.account import Actor
from app.schemas.guest import GuestRecord
from app.services.authorizer import Authorizer
from app.services.event_service import EventService
from app.services.repositories import AccountRepo, AssignmentRepo, EventRepo, GuestRepo


def _start_of_today() -> datetime:
    return datetime.combine(datetime.utcnow().date(), time.min)


def _checked_in_since(guests: List[GuestRecord], since: datetime) -> int:
    return sum(1 for g in guests if g.is_checked_in and g.checked_in_at and g.checked_in_at >= since)


def _rate(part: int, total: int) -> int:
    return round(part * 100 / total) if total else 0


class StatsService:
    """Dashboard counters, shaped per role"""

    @staticmethod
    def get_stats(db: Session, actor: Actor) -> Dict[str, int]:
        if actor.role == Role.SUPER_ADMIN:
            events = EventRepo.list_all(db)
            return {
                "total_admins": AccountRepo.count_by_role(db, Role.ADMIN),
                "total_event_managers": AccountRepo.count_by_role(db, Role.EVENT_MANAGER),
                "total_events": len(events),
                "active_events": sum(1 for e in events if e.is_active),
            }

        if actor.role == Role.ADMIN:
            events = EventRepo.list_all(db)
            return {
                "total_event_managers": AccountRepo.count_by_role(db, Role.EVENT_MANAGER),
                "total_events": len(events),
                "active_events": sum(1 for e in events if e.is_active),
                "total_guests": len(GuestRepo.list_all(db)),
            }

        if actor.role == Role.EVENT_MANAGER:
            events = EventRepo.list_by_manager(db, actor.id)
            guests = GuestRepo.list_by_events(db, [e.id for e in events])
            return {
                "total_events": len(events),
                "active_events": sum(1 for e in events if e.is_active),
                "total_guests": len(guests),
                "checked_in_today": _checked_in_since(guests, _start_of_today()),
            }

        events = EventService.events_for_organizer(db, actor.id)
        guests = GuestRepo.list_by_events(db, [e.id for e in events])
        return {
            "assigned_events": len(events),
            "total_guests": len(guests),
            "checked_in": sum(1 for g in guests if g.is_checked_in),
        }

    @staticmethod
    def get_overview(db: Session, actor: Actor) -> Dict[str, Any]:
        """System-wide breakdown for the super admin dashboard"""
        Authorizer.require_role(actor, Role.SUPER_ADMIN)

        events = EventRepo.list_all(db)
        guests = GuestRepo.list_all(db)
        managers = {m.id: m for m in AccountRepo.list_by_role(db, Role.EVENT_MANAGER)}
        organizers_per_event = AssignmentRepo.count_by_event(db)

        guests_by_event: Dict[str, List[GuestRecord]] = {}
        for guest in guests:
            guests_by_event.setdefault(guest.event_id, []).append(guest)

        event_stats = []
        for event in events:
            event_guests = guests_by_event.get(event.id, [])
            checked_in = sum(1 for g in event_guests if g.is_checked_in)
            categories = Counter(g.category for g in event_guests)
            manager = managers.get(event.event_manager_id)
            event_stats.append({
                "id": event.id,
                "name": event.name,
                "date": event.date,
                "location": event.location,
                "is_active": event.is_active,
                "manager_id": event.event_manager_id,
                "manager_name": manager.name if manager else "unknown",
                "total_guests": len(event_guests),
                "checked_in": checked_in,
                "pending": len(event_guests) - checked_in,
                "check_in_rate": _rate(checked_in, len(event_guests)),
                "organizers_count": organizers_per_event.get(event.id, 0),
                "category_breakdown": {c.value: categories.get(c, 0) for c in GuestCategory},
            })

        total_checked_in = sum(1 for g in guests if g.is_checked_in)
        overview = {
            "total_guests": len(guests),
            "total_checked_in": total_checked_in,
            "today_check_ins": _checked_in_since(guests, _start_of_today()),
            "check_in_rate": _rate(total_checked_in, len(guests)),
            "total_events": len(events),
            "active_events": sum(1 for e in events if e.is_active),
        }
        for role, key in ((Role.ADMIN, "admins"), (Role.EVENT_MANAGER, "event_managers"), (Role.ORGANIZER, "organizers")):
            overview[f"total_{key}"] = AccountRepo.count_by_role(db, role)
            overview[f"active_{key}"] = AccountRepo.count_by_role(db, role, active_only=True)

        return {"overview": overview, "events": event_stats}
