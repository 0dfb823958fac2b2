"""
Shared test fixtures
"""

import os

# Cheap hashing for tests; must be set before app settings are imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.db import Base
from app.core.roles import Role
from app.schemas.account import AccountCreate, AccountRecord, Actor
from app.schemas.event import EventCreate
from app.services.account_service import AccountService
from app.services.event_service import EventService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_checkin.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def actor_of(account: AccountRecord) -> Actor:
    return Actor(id=account.id, role=account.role, name=account.name)

def create_account(db, creator: AccountRecord, username: str, role: Role, **extra) -> AccountRecord:
    payload = AccountCreate(
        username=username,
        name=extra.pop("name", username.title()),
        password=extra.pop("password", "secret123"),
        role=role,
        **extra
    )
    return AccountService.create_account(db, actor_of(creator), payload)

def create_event(db, manager: AccountRecord, name: str = "Gala Dinner", **extra):
    payload = EventCreate(name=name, date=extra.pop("date", datetime(2026, 11, 20, 19, 0)), **extra)
    return EventService.create_event(db, actor_of(manager), payload)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def hierarchy(db_session):
    """Root > admin > event manager > organizer, one account per level"""
    root = AccountService.ensure_root(db_session, "root", "rootpass", "Root")
    admin = create_account(db_session, root, "admin1", Role.ADMIN)
    manager = create_account(db_session, admin, "manager1", Role.EVENT_MANAGER, event_quota=5)
    organizer = create_account(db_session, manager, "organizer1", Role.ORGANIZER)
    return SimpleNamespace(root=root, admin=admin, manager=manager, organizer=organizer)
