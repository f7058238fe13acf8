# ruff: noqa: S101
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tablemaster.config import get_settings
from tablemaster.errors import (
    AuthenticationError,
    NotFoundError,
    StateError,
    UnsupportedEntityError,
    ValidationError,
    WriteError,
)
from tablemaster.models import ChangeRequestStatus, DiningTable, MenuCategory, MenuItem, PrefixedMenu
from tablemaster.repositories.record_store import RecordStore
from tablemaster.services import change_requests
from tablemaster.services.edits import snapshot


def _steak(db, categories) -> MenuItem:
    return RecordStore(db, MenuItem).insert({
        "name": "Bone-in Ribeye",
        "category_id": categories["steaks"].id,
        "price": 78,
        "country": "CA",
        "origin": "Alberta",
        "cut": "Ribeye",
        "weight_oz": 22,
        "aging_days": 45,
    })


def test_submit_requires_identified_actor(db) -> None:
    with pytest.raises(AuthenticationError):
        change_requests.submit(db, None, "table", None, "create", None, {"table_number": "1"})


def test_submit_rejects_unknown_entity_type(db, staff) -> None:
    with pytest.raises(UnsupportedEntityError):
        change_requests.submit(db, staff, "guest", None, "create", None, {"name": "Ana"})


def test_submit_rejects_bad_snapshots(db, staff) -> None:
    with pytest.raises(ValidationError):
        change_requests.submit(db, staff, "table", "t-1", "update", None, {"section": "Bar"})
    with pytest.raises(ValidationError):
        change_requests.submit(db, staff, "table", None, "availability", {}, {"is_unavailable": True})


def test_submit_does_not_touch_entity(db, staff) -> None:
    table = RecordStore(db, DiningTable).insert({"table_number": "7", "section": "Main"})
    before = snapshot(table)
    req = change_requests.submit(db, staff, "table", table.id, "update", before, {**before, "section": "Patio"})
    assert req.status == ChangeRequestStatus.PENDING.value
    assert req.email == staff.email
    assert req.reviewed_at is None
    db.refresh(table)
    assert table.section == "Main"


def test_list_pending_is_oldest_first(db, staff, admin) -> None:
    newer = change_requests.submit(db, staff, "table", None, "create", None, {"table_number": "1"})
    older = change_requests.submit(db, staff, "table", None, "create", None, {"table_number": "2"})
    done = change_requests.submit(db, staff, "table", None, "create", None, {"table_number": "3"})
    older.created_at = datetime.utcnow() - timedelta(minutes=10)
    db.commit()
    change_requests.reject(db, done.id, admin)

    pending = change_requests.list_pending(db)
    assert [r.id for r in pending] == [older.id, newer.id]


def test_reject_records_reviewer_without_mutation(db, staff, admin) -> None:
    table = RecordStore(db, DiningTable).insert({"table_number": "9"})
    req = change_requests.submit(db, staff, "table", table.id, "delete", snapshot(table), None)

    rejected = change_requests.reject(db, req.id, admin, "Still in use tonight")
    assert rejected.status == ChangeRequestStatus.REJECTED.value
    assert rejected.reviewer_id == admin.id
    assert rejected.reviewer_email == admin.email
    assert rejected.decision_notes == "Still in use tonight"
    assert rejected.reviewed_at is not None
    assert RecordStore(db, DiningTable).get(table.id) is not None


def test_decisions_are_final(db, staff, admin) -> None:
    req = change_requests.submit(db, staff, "table", None, "create", None, {"table_number": "4"})
    change_requests.reject(db, req.id, admin)
    with pytest.raises(StateError):
        change_requests.reject(db, req.id, admin)
    with pytest.raises(StateError):
        change_requests.approve_and_apply(db, req.id, admin)
    assert db.query(DiningTable).count() == 0


def test_unknown_request_is_not_found(db, admin) -> None:
    with pytest.raises(NotFoundError):
        change_requests.reject(db, "missing", admin)
    with pytest.raises(NotFoundError):
        change_requests.approve_and_apply(db, "missing", admin)


def test_approve_create_menu_item_resolves_category(db, staff, admin, categories) -> None:
    after = {"name": "Tuna Tartare", "category": "appetizers", "price": 18}
    req = change_requests.submit(db, staff, "menu_item", None, "create", None, after)
    assert req.id in [r.id for r in change_requests.list_pending(db)]

    approved = change_requests.approve_and_apply(db, req.id, admin)
    assert approved.status == ChangeRequestStatus.APPROVED.value
    assert approved.entity_id is not None

    item = RecordStore(db, MenuItem).get(approved.entity_id)
    assert item.name == "Tuna Tartare"
    assert item.category_id == categories["appetizers"].id
    assert item.price == 18
    assert item.country is None
    assert item.origin is None
    assert item.weight_oz is None
    assert approved.after_data == after


def test_approve_normalizes_steak_fields(db, staff, admin, categories) -> None:
    after = {
        "name": "Striploin",
        "category": "Steaks",
        "price": "64",
        "country": " us ",
        "origin": "   ",
        "cut": "",
        "weight_oz": "14",
        "aging_days": "",
    }
    req = change_requests.submit(db, staff, "menu_item", None, "create", None, after)
    approved = change_requests.approve_and_apply(db, req.id, admin)

    item = RecordStore(db, MenuItem).get(approved.entity_id)
    assert item.category_id == categories["steaks"].id
    assert item.country == "US"
    assert item.origin is None
    assert item.cut == "Unspecified"
    assert item.weight_oz == 14
    assert item.aging_days is None
    assert item.price == 64


def test_category_change_away_from_steaks_clears_steak_fields(db, staff, admin, categories) -> None:
    item = _steak(db, categories)
    before = {**snapshot(item), "category": "steaks"}
    after = {**before, "category": "sides"}
    after.pop("category_id")
    req = change_requests.submit(db, staff, "menu_item", item.id, "update", before, after)

    payload = change_requests.build_payload(db, req)
    assert payload["country"] is None
    assert payload["origin"] is None
    assert payload["weight_oz"] is None

    change_requests.approve_and_apply(db, req.id, admin)
    db.refresh(item)
    assert item.category_id == categories["sides"].id
    assert (item.country, item.origin, item.weight_oz, item.cut, item.aging_days) == (None, None, None, None, None)


def test_missing_category_keeps_request_pending(db, staff, admin, categories) -> None:
    req = change_requests.submit(db, staff, "menu_item", None, "create", None, {"name": "Mystery Dish"})
    with pytest.raises(ValidationError):
        change_requests.approve_and_apply(db, req.id, admin)
    assert change_requests.get_by_id(db, req.id).status == ChangeRequestStatus.PENDING.value


def test_failed_write_leaves_request_pending(db, staff, admin, monkeypatch) -> None:
    req = change_requests.submit(db, staff, "table", None, "create", None, {"table_number": "12"})

    def failing_insert(self, payload):
        raise WriteError("disk full")

    monkeypatch.setattr(RecordStore, "insert", failing_insert)
    with pytest.raises(WriteError):
        change_requests.approve_and_apply(db, req.id, admin)

    stored = change_requests.get_by_id(db, req.id)
    assert stored.status == ChangeRequestStatus.PENDING.value
    assert stored.reviewer_id is None
    assert stored.reviewed_at is None
    assert db.query(DiningTable).count() == 0


def test_approve_delete_of_vanished_entity_fails(db, staff, admin) -> None:
    table = RecordStore(db, DiningTable).insert({"table_number": "5"})
    req = change_requests.submit(db, staff, "table", table.id, "delete", snapshot(table), None)
    RecordStore(db, DiningTable).delete(table.id)

    with pytest.raises(NotFoundError):
        change_requests.approve_and_apply(db, req.id, admin)
    assert change_requests.get_by_id(db, req.id).status == ChangeRequestStatus.PENDING.value


def test_approve_update_and_delete_tables(db, staff, admin) -> None:
    table = RecordStore(db, DiningTable).insert({"table_number": "3", "section": "Main"})
    before = snapshot(table)
    update = change_requests.submit(db, staff, "table", table.id, "update", before, {**before, "section": "Bar"})
    change_requests.approve_and_apply(db, update.id, admin, "ok")
    db.refresh(table)
    assert table.section == "Bar"

    delete = change_requests.submit(db, staff, "table", table.id, "delete", snapshot(table), None)
    change_requests.approve_and_apply(db, delete.id, admin)
    assert RecordStore(db, DiningTable).get(table.id) is None


def test_availability_writes_only_the_flag(db, staff, admin, categories) -> None:
    item = _steak(db, categories)
    before = snapshot(item)
    after = {**before, "is_unavailable": True, "price": 1, "country": None}
    req = change_requests.submit(db, staff, "menu_item", item.id, "availability", before, after)

    assert change_requests.build_payload(db, req) == {"is_unavailable": True}
    change_requests.approve_and_apply(db, req.id, admin)
    db.refresh(item)
    assert item.is_unavailable is True
    assert item.price == 78
    assert item.country == "CA"


def test_prefixed_menu_create(db, staff, admin) -> None:
    after = {"name": "Chef's Tasting", "courses": [{"course": "First", "items": [{"id": "m-1", "name": "Oysters"}]}]}
    req = change_requests.submit(db, staff, "prefixed_menu", None, "create", None, after)
    approved = change_requests.approve_and_apply(db, req.id, admin)
    menu = RecordStore(db, PrefixedMenu).get(approved.entity_id)
    assert menu.name == "Chef's Tasting"
    assert menu.courses[0]["items"][0]["name"] == "Oysters"


def test_category_id_change_away_from_steaks_clears_steak_fields(db, staff, admin, categories) -> None:
    item = _steak(db, categories)
    before = {**snapshot(item), "category": "steaks"}
    after = {**before, "category_id": categories["sides"].id}
    req = change_requests.submit(db, staff, "menu_item", item.id, "update", before, after)

    payload = change_requests.build_payload(db, req)
    assert payload["category_id"] == categories["sides"].id
    assert (payload["country"], payload["origin"], payload["weight_oz"]) == (None, None, None)

    change_requests.approve_and_apply(db, req.id, admin)
    db.refresh(item)
    assert item.category_id == categories["sides"].id
    assert (item.country, item.origin, item.weight_oz) == (None, None, None)


def test_category_id_change_into_steaks_keeps_steak_fields(db, staff, admin, categories) -> None:
    item = RecordStore(db, MenuItem).insert({"name": "Hanger", "category_id": categories["sides"].id, "price": 38})
    before = {**snapshot(item), "category": "sides"}
    after = {**before, "category_id": categories["steaks"].id, "country": "us", "origin": "Nebraska", "weight_oz": "10"}
    req = change_requests.submit(db, staff, "menu_item", item.id, "update", before, after)

    change_requests.approve_and_apply(db, req.id, admin)
    db.refresh(item)
    assert item.category_id == categories["steaks"].id
    assert (item.country, item.origin, item.weight_oz, item.cut) == ("US", "Nebraska", 10, "Unspecified")


def test_created_category_rolls_back_with_failed_write(db, staff, admin, categories, monkeypatch) -> None:
    monkeypatch.setattr(get_settings(), "auto_create_menu_categories", True)
    req = change_requests.submit(db, staff, "menu_item", None, "create", None, {"name": "Oysters", "category": "raw bar"})

    def failing_insert(self, payload):
        raise WriteError("disk full")

    monkeypatch.setattr(RecordStore, "insert", failing_insert)
    with pytest.raises(WriteError):
        change_requests.approve_and_apply(db, req.id, admin)

    assert db.query(MenuCategory).filter(MenuCategory.slug == "raw_bar").first() is None
    assert db.query(MenuCategory).count() == 3
    assert change_requests.get_by_id(db, req.id).status == ChangeRequestStatus.PENDING.value
