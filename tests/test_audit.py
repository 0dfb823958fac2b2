"""
Tests for the audit trail and dashboard statistics
"""

import time

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import Forbidden, NotFound
from app.core.roles import Role
from app.schemas.event import EventUpdate
from app.services.assignment_service import AssignmentService
from app.services.audit_service import AuditTrail
from app.services.checkin_service import CheckInService
from app.services.event_service import EventService
from app.services.guest_service import GuestService
from app.services.repositories import AuditRepo, GuestRepo
from app.services.stats_service import StatsService

from tests.conftest import actor_of, create_account, create_event

def test_entries_are_newest_first(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    manager = actor_of(hierarchy.manager)
    time.sleep(0.01)
    EventService.update_event(db_session, manager, event.id, EventUpdate(location="Main Hall"))
    time.sleep(0.01)
    GuestService.upload_guests(db_session, manager, event.id, [{"name": "Amal"}])

    entries = AuditTrail.list_for_event(db_session, manager, event.id)
    assert [e.action for e in entries] == ["upload_guests", "update_event", "create_event"]
    assert all(e.user_id == hierarchy.manager.id for e in entries)

def test_entries_survive_event_deletion(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    EventService.delete_event(db_session, actor_of(hierarchy.manager), event.id)

    actions = [e.action for e in AuditRepo.list_by_event(db_session, event.id)]
    assert sorted(actions) == ["create_event", "delete_event"]

def test_audit_access(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    AssignmentService.assign(db_session, actor_of(hierarchy.manager), event.id, hierarchy.organizer.id)
    other_manager = create_account(db_session, hierarchy.admin, "manager2", Role.EVENT_MANAGER)

    for account in (hierarchy.organizer, other_manager):
        with pytest.raises(Forbidden):
            AuditTrail.list_for_event(db_session, actor_of(account), event.id)
    for account in (hierarchy.admin, hierarchy.root):
        assert len(AuditTrail.list_for_event(db_session, actor_of(account), event.id)) == 2
    with pytest.raises(NotFound):
        AuditTrail.list_for_event(db_session, actor_of(hierarchy.admin), "no-such-event")

def test_failed_audit_write_keeps_the_check_in(db_session, hierarchy, monkeypatch):
    event = create_event(db_session, hierarchy.manager)
    manager = actor_of(hierarchy.manager)
    _, guests = GuestService.upload_guests(db_session, manager, event.id, [{"name": "Amal"}])

    def broken_append(*args, **kwargs):
        raise OperationalError("INSERT INTO audit_logs", {}, Exception("disk full"))

    monkeypatch.setattr(AuditRepo, "append", staticmethod(broken_append))
    result = CheckInService.check_in(db_session, manager, guests[0].id)

    assert result.status.value == "success"
    assert GuestRepo.get(db_session, guests[0].id).is_checked_in is True
    monkeypatch.undo()
    assert [e.action for e in AuditRepo.list_by_event(db_session, event.id)].count("check_in") == 0

def test_stats_by_role(db_session, hierarchy):
    manager = actor_of(hierarchy.manager)
    event = create_event(db_session, hierarchy.manager)
    create_event(db_session, hierarchy.manager, name="Second Night")
    _, guests = GuestService.upload_guests(db_session, manager, event.id, [{"name": "Amal"}, {"name": "Badr"}])
    AssignmentService.assign(db_session, manager, event.id, hierarchy.organizer.id)
    CheckInService.check_in(db_session, actor_of(hierarchy.organizer), guests[0].id)

    root_stats = StatsService.get_stats(db_session, actor_of(hierarchy.root))
    assert root_stats == {"total_admins": 1, "total_event_managers": 1, "total_events": 2, "active_events": 2}

    admin_stats = StatsService.get_stats(db_session, actor_of(hierarchy.admin))
    assert admin_stats["total_guests"] == 2

    manager_stats = StatsService.get_stats(db_session, manager)
    assert manager_stats["total_events"] == 2
    assert manager_stats["checked_in_today"] == 1

    organizer_stats = StatsService.get_stats(db_session, actor_of(hierarchy.organizer))
    assert organizer_stats == {"assigned_events": 1, "total_guests": 2, "checked_in": 1}

def test_overview(db_session, hierarchy):
    manager = actor_of(hierarchy.manager)
    event = create_event(db_session, hierarchy.manager)
    GuestService.upload_guests(db_session, manager, event.id, [
        {"name": "Amal", "category": "vip"},
        {"name": "Badr"},
    ])

    with pytest.raises(Forbidden):
        StatsService.get_overview(db_session, actor_of(hierarchy.admin))

    result = StatsService.get_overview(db_session, actor_of(hierarchy.root))
    assert result["overview"]["total_guests"] == 2
    assert result["overview"]["total_organizers"] == 1
    event_stats = result["events"][0]
    assert event_stats["manager_name"] == "Manager1"
    assert event_stats["category_breakdown"]["vip"] == 1
    assert event_stats["category_breakdown"]["regular"] == 1
    assert event_stats["pending"] == 2
