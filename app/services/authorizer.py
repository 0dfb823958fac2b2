"""
Role hierarchy authorization.

Stateless: every check receives the resolved Actor and the records it is
about. The only table consulted is ``CREATABLE_ROLES``.
"""

from typing import Iterable, Optional

from sqlalchemy.orm import Session

from app.core.errors import Forbidden
from app.core.roles import CREATABLE_ROLES, STAFF_ROLES, Role
from app.schemas.account import AccountRecord, Actor
from app.schemas.event import EventRecord
from app.services.repositories import AccountRepo


class Authorizer:
    """Authorization rules for the super_admin > admin > event_manager > organizer hierarchy"""

    @staticmethod
    def can_create(actor_role: Role, target_role: Role) -> bool:
        return target_role in CREATABLE_ROLES.get(actor_role, frozenset())

    @staticmethod
    def require_create(actor: Actor, target_role: Role) -> None:
        if not Authorizer.can_create(actor.role, target_role):
            raise Forbidden(f"{actor.role.value} may not create {target_role.value} accounts")

    @staticmethod
    def require_role(actor: Actor, *roles: Role) -> None:
        if actor.role not in roles:
            raise Forbidden()

    @staticmethod
    def can_list(actor: Actor, target_role: Role) -> bool:
        """Whether the actor may list accounts of a role at all"""
        if target_role == Role.ORGANIZER:
            return actor.role in (Role.EVENT_MANAGER, Role.ADMIN, Role.SUPER_ADMIN)
        return Authorizer.can_create(actor.role, target_role)

    @staticmethod
    def is_ancestor(db: Session, actor_id: str, target: AccountRecord) -> bool:
        """Walk the creator chain upwards from target looking for actor_id"""
        seen = set()
        creator_id = target.created_by_id
        while creator_id and creator_id not in seen:
            if creator_id == actor_id:
                return True
            seen.add(creator_id)
            creator = AccountRepo.get(db, creator_id)
            creator_id = creator.created_by_id if creator else None
        return False

    @staticmethod
    def require_manage(db: Session, actor: Actor, target: AccountRecord) -> None:
        """Activation and similar edits: an ancestor, or staff over a role they create"""
        if target.id == actor.id or target.created_by_id is None:
            raise Forbidden("This account cannot be modified by you")
        if Authorizer.is_ancestor(db, actor.id, target):
            return
        if actor.role in STAFF_ROLES and Authorizer.can_create(actor.role, target.role):
            return
        raise Forbidden()

    # -------- event scope --------

    @staticmethod
    def require_event_owner(actor: Actor, event: Optional[EventRecord]) -> EventRecord:
        """Event-scoped mutations are reserved to the owning event manager"""
        if event is None or actor.role != Role.EVENT_MANAGER or event.event_manager_id != actor.id:
            raise Forbidden()
        return event

    @staticmethod
    def can_view_event(actor: Actor, event: EventRecord, assigned_event_ids: Iterable[str] = ()) -> bool:
        if actor.role in STAFF_ROLES:
            return True
        if actor.role == Role.EVENT_MANAGER:
            return event.event_manager_id == actor.id
        if actor.role == Role.ORGANIZER:
            return event.is_active and event.id in set(assigned_event_ids)
        return False

    @staticmethod
    def can_check_in(actor: Actor, event: EventRecord, is_assigned: bool) -> bool:
        if actor.role == Role.EVENT_MANAGER:
            return event.event_manager_id == actor.id
        if actor.role == Role.ORGANIZER:
            return is_assigned and event.is_active
        return False

    @staticmethod
    def require_audit_access(actor: Actor, event: EventRecord) -> None:
        if actor.role in STAFF_ROLES:
            return
        if actor.role == Role.EVENT_MANAGER and event.event_manager_id == actor.id:
            return
        raise Forbidden()
