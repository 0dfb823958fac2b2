"""
Tests for the event quota ledger
"""

import pytest

from app.core.config import settings
from app.core.errors import Forbidden, InvalidQuota, QuotaExceeded, ValidationError
from app.core.roles import Role
from app.services.event_service import EventService
from app.services.guest_service import GuestService
from app.services.quota_service import QuotaLedger
from app.services.repositories import AccountRepo, EventRepo

from tests.conftest import actor_of, create_account, create_event

def test_remaining_after_events(db_session, hierarchy):
    for i in range(3):
        create_event(db_session, hierarchy.manager, name=f"Event {i}")

    manager = AccountRepo.get(db_session, hierarchy.manager.id)
    usage = QuotaLedger.usage(manager)
    assert usage.event_quota == 5
    assert usage.events_used == 3
    assert usage.events_remaining == 2

def test_creation_past_quota_is_advisory(db_session, hierarchy, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_EVENT_QUOTA", False)
    for i in range(6):
        create_event(db_session, hierarchy.manager, name=f"Event {i}")

    manager = AccountRepo.get(db_session, hierarchy.manager.id)
    assert manager.events_used == 6
    assert QuotaLedger.usage(manager).events_remaining == 0

def test_enforced_quota_blocks_creation(db_session, hierarchy, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_EVENT_QUOTA", True)
    manager = create_account(db_session, hierarchy.admin, "small_manager", Role.EVENT_MANAGER, event_quota=1)
    create_event(db_session, manager)

    with pytest.raises(QuotaExceeded):
        create_event(db_session, manager, name="One too many")
    assert len(EventRepo.list_by_manager(db_session, manager.id)) == 1

def test_deleting_events_does_not_refund(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    EventService.delete_event(db_session, actor_of(hierarchy.manager), event.id)

    manager = AccountRepo.get(db_session, hierarchy.manager.id)
    assert manager.events_used == 1
    assert QuotaLedger.usage(manager).events_remaining == 4

def test_update_quota(db_session, hierarchy):
    updated = QuotaLedger.update_quota(db_session, actor_of(hierarchy.admin), hierarchy.manager.id, 20)
    assert updated.event_quota == 20

    updated = QuotaLedger.update_quota(db_session, actor_of(hierarchy.root), hierarchy.manager.id, 1)
    assert updated.event_quota == 1

@pytest.mark.parametrize("quota", [0, 101])
def test_update_quota_bounds(db_session, hierarchy, quota):
    with pytest.raises(InvalidQuota):
        QuotaLedger.update_quota(db_session, actor_of(hierarchy.admin), hierarchy.manager.id, quota)
    assert AccountRepo.get(db_session, hierarchy.manager.id).event_quota == 5

def test_update_quota_rules(db_session, hierarchy):
    with pytest.raises(Forbidden):
        QuotaLedger.update_quota(db_session, actor_of(hierarchy.manager), hierarchy.manager.id, 50)
    with pytest.raises(ValidationError):
        QuotaLedger.update_quota(db_session, actor_of(hierarchy.admin), hierarchy.organizer.id, 10)

def test_subscriptions(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    GuestService.upload_guests(
        db_session, actor_of(hierarchy.manager), event.id,
        [{"name": "Amal"}, {"name": "Badr"}]
    )
    create_account(db_session, hierarchy.admin, "idle_manager", Role.EVENT_MANAGER, event_quota=10)

    subscriptions = {s.username: s for s in QuotaLedger.list_subscriptions(db_session, actor_of(hierarchy.admin))}
    assert subscriptions["manager1"].events_used == 1
    assert subscriptions["manager1"].events_remaining == 4
    assert subscriptions["manager1"].total_guests == 2
    assert subscriptions["idle_manager"].events_remaining == 10
    assert subscriptions["idle_manager"].total_guests == 0

    with pytest.raises(Forbidden):
        QuotaLedger.list_subscriptions(db_session, actor_of(hierarchy.manager))
