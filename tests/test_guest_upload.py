"""
Tests for guest list upload, Excel import and export
"""

import io

import pandas as pd
import pytest

from app.core.errors import Forbidden, NotFound, ValidationError
from app.core.roles import Role
from app.schemas.guest import GuestRow
from app.services.checkin_service import CheckInService
from app.services.excel_service import ExcelService
from app.services.guest_service import GuestService
from app.services.repositories import GuestRepo

from tests.conftest import actor_of, create_account, create_event

def create_test_excel(data):
    """Helper function to create Excel bytes from data"""
    df = pd.DataFrame(data)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, index=False)
    return buffer.getvalue()

@pytest.mark.parametrize("raw, expected", [
    ("VIP", "vip"),
    (" Media ", "media"),
    ("sponsor", "sponsor"),
    ("press", "regular"),
    (None, "regular"),
    ("", "regular"),
])
def test_category_normalization(raw, expected):
    assert GuestService.normalize_row({"name": "Amal", "category": raw})["category"] == expected

@pytest.mark.parametrize("raw, expected", [
    ("3", 3),
    (2.0, 2),
    ("two", 0),
    (None, 0),
    (-4, 0),
    (float("inf"), 0),
])
def test_companions_normalization(raw, expected):
    assert GuestService.normalize_row({"companions": raw})["companions"] == expected

def test_blank_row_becomes_empty_guest():
    row = GuestService.normalize_row(GuestRow())
    assert row == {"name": "", "phone": "", "category": "regular", "companions": 0, "notes": ""}

def test_upload_assigns_unique_codes(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    count, guests = GuestService.upload_guests(
        db_session, actor_of(hierarchy.manager), event.id,
        [{"name": "Amal"}, {"name": "Badr"}, {"name": "Huda"}]
    )

    assert count == 3
    assert len({g.qr_code for g in guests}) == 3
    assert all(not g.is_checked_in for g in guests)

def test_empty_upload(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    count, guests = GuestService.upload_guests(db_session, actor_of(hierarchy.manager), event.id, [])
    assert count == 0
    assert guests == []

def test_upload_requires_owner(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    other_manager = create_account(db_session, hierarchy.admin, "manager2", Role.EVENT_MANAGER)

    for account in (other_manager, hierarchy.organizer, hierarchy.admin):
        with pytest.raises(Forbidden):
            GuestService.upload_guests(db_session, actor_of(account), event.id, [{"name": "Amal"}])
    with pytest.raises(Forbidden):
        GuestService.upload_guests(db_session, actor_of(hierarchy.manager), "no-such-event", [{"name": "Amal"}])

    _, total = GuestRepo.list_by_event(db_session, event.id)
    assert total == 0

def test_list_guests_search_and_paging(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    manager = actor_of(hierarchy.manager)
    GuestService.upload_guests(db_session, manager, event.id, [
        {"name": "Amal Saleh", "phone": "0501"},
        {"name": "Badr", "phone": "0502"},
        {"name": "Huda", "phone": "0599"},
    ])

    found, total = GuestService.list_guests(db_session, manager, event.id, search="amal")
    assert total == 1
    assert found[0].name == "Amal Saleh"

    found, total = GuestService.list_guests(db_session, manager, event.id, search="050")
    assert total == 2

    page, total = GuestService.list_guests(db_session, manager, event.id, offset=2, limit=2)
    assert total == 3
    assert len(page) == 1

def test_unassigned_organizer_cannot_list(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    with pytest.raises(Forbidden):
        GuestService.list_guests(db_session, actor_of(hierarchy.organizer), event.id)

def test_lookup_by_token(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    _, guests = GuestService.upload_guests(db_session, actor_of(hierarchy.manager), event.id, [{"name": "Amal"}])

    guest = GuestService.get_guest_by_token(db_session, actor_of(hierarchy.admin), guests[0].qr_code)
    assert guest.id == guests[0].id
    with pytest.raises(NotFound):
        GuestService.get_guest_by_token(db_session, actor_of(hierarchy.admin), "missing")

def test_delete_guest(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    manager = actor_of(hierarchy.manager)
    _, guests = GuestService.upload_guests(db_session, manager, event.id, [{"name": "Amal"}])

    with pytest.raises(Forbidden):
        GuestService.delete_guest(db_session, actor_of(hierarchy.organizer), guests[0].id)

    GuestService.delete_guest(db_session, manager, guests[0].id)
    assert GuestRepo.get(db_session, guests[0].id) is None
    with pytest.raises(NotFound):
        GuestService.delete_guest(db_session, manager, guests[0].id)

def test_parse_english_headers():
    content = create_test_excel({
        'Name': ['Amal', None, 'Badr'],
        'Phone': ['0501234567', None, '0507654321'],
        'Category': ['VIP', None, 'unknown'],
        'Companions': [2, None, 0],
    })

    rows = ExcelService.parse_guest_rows(content)
    assert len(rows) == 2
    assert rows[0]['name'] == 'Amal'
    assert rows[0]['phone'] == '0501234567'
    assert GuestService.normalize_row(rows[0])['companions'] == 2
    assert 'notes' not in rows[0]

def test_parse_arabic_headers():
    content = create_test_excel({
        'الاسم': ['أحمد'],
        'الجوال': ['0501112222'],
        'الفئة': ['media'],
        'عدد المرافقين': [1],
        'ملاحظات': ['الصف الأول'],
    })

    rows = ExcelService.parse_guest_rows(content)
    assert len(rows) == 1
    assert GuestService.normalize_row(rows[0]) == {
        'name': 'أحمد',
        'phone': '0501112222',
        'category': 'media',
        'companions': 1,
        'notes': 'الصف الأول',
    }

def test_parse_rejects_non_excel():
    with pytest.raises(ValidationError):
        ExcelService.parse_guest_rows(b"this is not a workbook")

def test_template_has_recognised_columns():
    df = pd.read_excel(io.BytesIO(ExcelService.create_template()))
    assert list(df.columns) == ExcelService.TEMPLATE_COLUMNS
    assert len(ExcelService.rows_from_dataframe(df)) == 3

def test_excel_upload_end_to_end(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    rows = ExcelService.parse_guest_rows(create_test_excel({
        'Guest Name': ['Amal', 'Badr'],
        'Mobile': ['0501', '0502'],
        'Category': ['Sponsor', 'vip'],
    }))

    count, guests = GuestService.upload_guests(db_session, actor_of(hierarchy.manager), event.id, rows)
    assert count == 2
    assert [g.category.value for g in guests] == ['sponsor', 'vip']
    assert guests[0].phone == '0501'

def test_export_reflects_checkins(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    manager = actor_of(hierarchy.manager)
    _, guests = GuestService.upload_guests(db_session, manager, event.id, [{"name": "Amal"}, {"name": "Badr"}])
    CheckInService.check_in(db_session, manager, guests[0].id)

    listed, _ = GuestService.list_guests(db_session, manager, event.id)
    df = pd.read_excel(io.BytesIO(ExcelService.export_guests(listed)))

    assert list(df.columns) == ExcelService.TEMPLATE_COLUMNS + ['Check-in Code', 'Checked In', 'Checked In At']
    checked = dict(zip(df['Name'], df['Checked In']))
    assert checked == {'Amal': 'Yes', 'Badr': 'No'}
    assert set(df['Check-in Code']) == {g.qr_code for g in guests}

def test_phone_numbers_keep_leading_zeros(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    rows = ExcelService.parse_guest_rows(create_test_excel({
        'Name': ['Amal', 'Badr'],
        'Phone': ['0501234567', '00966501234567'],
        'Companions': ['3', '0'],
    }))

    _, guests = GuestService.upload_guests(db_session, actor_of(hierarchy.manager), event.id, rows)
    assert [g.phone for g in guests] == ['0501234567', '00966501234567']
    assert [g.companions for g in guests] == [3, 0]

def test_search_treats_wildcards_literally(db_session, hierarchy):
    event = create_event(db_session, hierarchy.manager)
    manager = actor_of(hierarchy.manager)
    GuestService.upload_guests(db_session, manager, event.id, [
        {"name": "Amal_Saleh"},
        {"name": "Badr"},
        {"name": "Huda 100%"},
    ])

    found, total = GuestService.list_guests(db_session, manager, event.id, search="_")
    assert total == 1
    assert found[0].name == "Amal_Saleh"

    found, total = GuestService.list_guests(db_session, manager, event.id, search="%")
    assert total == 1
    assert found[0].name == "Huda 100%"
