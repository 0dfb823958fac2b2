"""
Repository layer abstracting storage.

Every read returns a frozen Pydantic snapshot; ORM rows never leave this
module. The only conditional write is ``GuestRepo.mark_checked_in``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateUsername
from app.core.roles import Role
from app.models import Account, AuditLog, Event, EventOrganizer, Guest
from app.schemas.account import AccountRecord
from app.schemas.event import AssignmentRecord, AuditLogRecord, EventRecord
from app.schemas.guest import GuestRecord


def _role_value(role: Role | str) -> str:
    return role.value if isinstance(role, Role) else role


# -------- Account repository --------

class AccountRepo:
    @staticmethod
    def get(db: Session, account_id: str) -> Optional[AccountRecord]:
        account = db.get(Account, account_id)
        return AccountRecord.model_validate(account) if account else None

    @staticmethod
    def get_by_username(db: Session, username: str) -> Optional[AccountRecord]:
        account = db.query(Account).filter(Account.username == username).first()
        return AccountRecord.model_validate(account) if account else None

    @staticmethod
    def create(
        db: Session,
        username: str,
        name: str,
        password_hash: str,
        role: Role,
        created_by_id: Optional[str],
        event_quota: int,
    ) -> AccountRecord:
        # Exact, case-sensitive match; the unique index catches concurrent inserts
        if db.query(Account.id).filter(Account.username == username).first():
            raise DuplicateUsername()
        account = Account(
            username=username,
            name=name,
            password_hash=password_hash,
            role=_role_value(role),
            created_by_id=created_by_id,
            event_quota=event_quota,
        )
        db.add(account)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateUsername()
        db.refresh(account)
        return AccountRecord.model_validate(account)

    @staticmethod
    def list_by_role(db: Session, role: Role) -> List[AccountRecord]:
        accounts = db.query(Account).filter(Account.role == _role_value(role)).order_by(Account.created_at).all()
        return [AccountRecord.model_validate(a) for a in accounts]

    @staticmethod
    def list_by_creator(db: Session, creator_id: str, role: Optional[Role] = None) -> List[AccountRecord]:
        query = db.query(Account).filter(Account.created_by_id == creator_id)
        if role is not None:
            query = query.filter(Account.role == _role_value(role))
        return [AccountRecord.model_validate(a) for a in query.order_by(Account.created_at).all()]

    @staticmethod
    def count_by_role(db: Session, role: Role, active_only: bool = False) -> int:
        query = db.query(Account).filter(Account.role == _role_value(role))
        if active_only:
            query = query.filter(Account.is_active == True)  # noqa: E712
        return query.count()

    @staticmethod
    def update(db: Session, account_id: str, **fields: Any) -> Optional[AccountRecord]:
        account = db.get(Account, account_id)
        if not account:
            return None
        for key, value in fields.items():
            setattr(account, key, value)
        db.commit()
        db.refresh(account)
        return AccountRecord.model_validate(account)


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get(db: Session, event_id: str) -> Optional[EventRecord]:
        event = db.get(Event, event_id)
        return EventRecord.model_validate(event) if event else None

    @staticmethod
    def list_all(db: Session) -> List[EventRecord]:
        return [EventRecord.model_validate(e) for e in db.query(Event).order_by(Event.date.desc()).all()]

    @staticmethod
    def list_by_manager(db: Session, manager_id: str) -> List[EventRecord]:
        events = db.query(Event).filter(Event.event_manager_id == manager_id).order_by(Event.date.desc()).all()
        return [EventRecord.model_validate(e) for e in events]

    @staticmethod
    def create(db: Session, manager_id: str, fields: Dict[str, Any]) -> EventRecord:
        """Insert an event and charge it to the manager's quota in one commit"""
        event = Event(event_manager_id=manager_id, is_active=True, **fields)
        db.add(event)
        db.query(Account).filter(Account.id == manager_id).update(
            {Account.events_used: Account.events_used + 1},
            synchronize_session=False,
        )
        db.commit()
        db.refresh(event)
        return EventRecord.model_validate(event)

    @staticmethod
    def update(db: Session, event_id: str, **fields: Any) -> Optional[EventRecord]:
        event = db.get(Event, event_id)
        if not event:
            return None
        for key, value in fields.items():
            setattr(event, key, value)
        db.commit()
        db.refresh(event)
        return EventRecord.model_validate(event)

    @staticmethod
    def delete(db: Session, event_id: str) -> None:
        event = db.get(Event, event_id)
        if event:
            # cascade removes guests and organizer links
            db.delete(event)
            db.commit()


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def get(db: Session, guest_id: str) -> Optional[GuestRecord]:
        guest = db.get(Guest, guest_id)
        return GuestRecord.model_validate(guest) if guest else None

    @staticmethod
    def get_by_qr_code(db: Session, qr_code: str) -> Optional[GuestRecord]:
        guest = db.query(Guest).filter(Guest.qr_code == qr_code).first()
        return GuestRecord.model_validate(guest) if guest else None

    @staticmethod
    def list_by_event(
        db: Session,
        event_id: str,
        search: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[GuestRecord], int]:
        query = db.query(Guest).filter(Guest.event_id == event_id)
        if search:
            term = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{term}%"
            query = query.filter(
                func.lower(Guest.name).like(pattern, escape="\\") | Guest.phone.like(pattern, escape="\\")
            )
        total = query.count()
        query = query.order_by(Guest.created_at, Guest.name).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [GuestRecord.model_validate(g) for g in query.all()], total

    @staticmethod
    def list_by_events(db: Session, event_ids: List[str]) -> List[GuestRecord]:
        if not event_ids:
            return []
        guests = db.query(Guest).filter(Guest.event_id.in_(event_ids)).all()
        return [GuestRecord.model_validate(g) for g in guests]

    @staticmethod
    def list_all(db: Session) -> List[GuestRecord]:
        return [GuestRecord.model_validate(g) for g in db.query(Guest).all()]

    @staticmethod
    def create_many(db: Session, rows: List[Dict[str, Any]]) -> List[GuestRecord]:
        if not rows:
            return []
        guests = [Guest(**row) for row in rows]
        db.add_all(guests)
        db.commit()
        for guest in guests:
            db.refresh(guest)
        return [GuestRecord.model_validate(g) for g in guests]

    @staticmethod
    def delete(db: Session, guest_id: str) -> None:
        guest = db.get(Guest, guest_id)
        if guest:
            db.delete(guest)
            db.commit()

    @staticmethod
    def mark_checked_in(db: Session, guest_id: str, actor_id: str, at: datetime) -> bool:
        """Compare-and-set on is_checked_in. True only for the caller that flipped it."""
        result = db.execute(
            update(Guest)
            .where(Guest.id == guest_id, Guest.is_checked_in == False)  # noqa: E712
            .values(is_checked_in=True, checked_in_at=at, checked_in_by=actor_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount == 1


# -------- Assignment repository --------

class AssignmentRepo:
    @staticmethod
    def get(db: Session, event_id: str, organizer_id: str) -> Optional[AssignmentRecord]:
        link = db.query(EventOrganizer).filter(
            EventOrganizer.event_id == event_id,
            EventOrganizer.organizer_id == organizer_id
        ).first()
        return AssignmentRecord.model_validate(link) if link else None

    @staticmethod
    def add(db: Session, event_id: str, organizer_id: str) -> Tuple[AssignmentRecord, bool]:
        """Insert the pair unless present. Returns (assignment, created)."""
        existing = AssignmentRepo.get(db, event_id, organizer_id)
        if existing:
            return existing, False
        link = EventOrganizer(event_id=event_id, organizer_id=organizer_id)
        db.add(link)
        try:
            db.commit()
        except IntegrityError:
            # lost an insert race; the pair exists now
            db.rollback()
            return AssignmentRepo.get(db, event_id, organizer_id), False
        db.refresh(link)
        return AssignmentRecord.model_validate(link), True

    @staticmethod
    def remove(db: Session, event_id: str, organizer_id: str) -> bool:
        deleted = db.query(EventOrganizer).filter(
            EventOrganizer.event_id == event_id,
            EventOrganizer.organizer_id == organizer_id
        ).delete(synchronize_session=False)
        db.commit()
        return deleted > 0

    @staticmethod
    def organizer_ids_for_event(db: Session, event_id: str) -> List[str]:
        rows = db.query(EventOrganizer.organizer_id).filter(EventOrganizer.event_id == event_id).all()
        return [row[0] for row in rows]

    @staticmethod
    def event_ids_for_organizer(db: Session, organizer_id: str) -> List[str]:
        rows = db.query(EventOrganizer.event_id).filter(EventOrganizer.organizer_id == organizer_id).all()
        return [row[0] for row in rows]

    @staticmethod
    def count_by_event(db: Session) -> Dict[str, int]:
        rows = db.query(EventOrganizer.event_id, func.count(EventOrganizer.id)).group_by(EventOrganizer.event_id).all()
        return {event_id: count for event_id, count in rows}


# -------- Audit log repository --------

class AuditRepo:
    @staticmethod
    def append(
        db: Session,
        event_id: str,
        user_id: str,
        action: str,
        details: str,
        guest_id: Optional[str] = None,
    ) -> AuditLogRecord:
        entry = AuditLog(
            event_id=event_id,
            user_id=user_id,
            action=action,
            details=details,
            guest_id=guest_id,
            timestamp=datetime.utcnow(),
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return AuditLogRecord.model_validate(entry)

    @staticmethod
    def list_by_event(db: Session, event_id: str) -> List[AuditLogRecord]:
        entries = db.query(AuditLog).filter(AuditLog.event_id == event_id).order_by(AuditLog.timestamp.desc()).all()
        return [AuditLogRecord.model_validate(e) for e in entries]
