# ruff: noqa: S101
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from tablemaster.auth import create_access_token
from tablemaster.database import get_db
from tablemaster.main import app
from tablemaster.models import ChangeRequest, DiningTable, MenuItem
from tablemaster.services.menu_cache import MenuCache, get_menu_cache


def _auth(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def client_app(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_menu_cache] = lambda: MenuCache(None, ttl_seconds=60)
    yield app
    app.dependency_overrides.clear()


def _client(application) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=application), base_url="http://testserver")


@pytest.mark.asyncio
async def test_requires_token(client_app) -> None:
    async with _client(client_app) as client:
        response = await client.get("/api/tables")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_staff_table_create_goes_to_review(client_app, db, staff, admin) -> None:
    async with _client(client_app) as client:
        proposed = await client.post("/api/tables", json={"table_number": "12", "section": "Patio"}, headers=_auth(staff))
        assert proposed.status_code == 202
        body = proposed.json()
        assert body["change_request"]["status"] == "pending"
        assert body["change_request"]["action"] == "create"
        assert db.query(DiningTable).count() == 0

        inbox = await client.get("/api/admin/inbox", headers=_auth(admin))
        assert inbox.status_code == 200
        cards = inbox.json()["change_requests"]
        assert len(cards) == 1
        assert cards[0]["changes"][0] == "section: Patio"
        assert cards[0]["more_changes"] == 0
        assert cards[0]["created_ago"].endswith("ago")

        approved = await client.post(
            f"/api/change-requests/{cards[0]['id']}/approve",
            json={"notes": "  looks good "},
            headers=_auth(admin),
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"
        assert approved.json()["decision_notes"] == "looks good"

        again = await client.post(f"/api/change-requests/{cards[0]['id']}/reject", headers=_auth(admin))
        assert again.status_code == 409

    table = db.query(DiningTable).one()
    assert table.table_number == "12"
    assert table.owner_id == staff.id


@pytest.mark.asyncio
async def test_admin_writes_directly(client_app, db, admin) -> None:
    async with _client(client_app) as client:
        created = await client.post("/api/tables", json={"table_number": "1"}, headers=_auth(admin))
        assert created.status_code == 201
        duplicate = await client.post("/api/tables", json={"table_number": " 1 "}, headers=_auth(admin))
        assert duplicate.status_code == 409
        patched = await client.patch(f"/api/tables/{created.json()['id']}", json={"section": "Bar"}, headers=_auth(admin))
        assert patched.status_code == 200
        assert patched.json()["section"] == "Bar"
    assert db.query(ChangeRequest).count() == 0


@pytest.mark.asyncio
async def test_admin_only_routes_forbid_staff(client_app, staff) -> None:
    async with _client(client_app) as client:
        assert (await client.get("/api/admin/inbox", headers=_auth(staff))).status_code == 403
        assert (await client.get("/api/change-requests/pending", headers=_auth(staff))).status_code == 403
        assert (await client.get("/api/users/request-access", headers=_auth(staff))).status_code == 403


@pytest.mark.asyncio
async def test_access_request_flow(client_app, staff, admin) -> None:
    async with _client(client_app) as client:
        me = await client.get("/api/auth/me", headers=_auth(staff))
        assert me.json()["requires_approval"] is True

        submitted = await client.post("/api/request-access", json={"reason": "closing manager"}, headers=_auth(staff))
        assert submitted.status_code == 201
        duplicate = await client.post("/api/request-access", json={}, headers=_auth(staff))
        assert duplicate.status_code == 409

        pending = await client.get("/api/users/request-access", headers=_auth(admin))
        assert [r["id"] for r in pending.json()] == [submitted.json()["id"]]

        decided = await client.patch(
            f"/api/users/request-access/{submitted.json()['id']}",
            json={"status": "approved"},
            headers=_auth(admin),
        )
        assert decided.status_code == 200
        again = await client.patch(
            f"/api/users/request-access/{submitted.json()['id']}",
            json={"status": "rejected"},
            headers=_auth(admin),
        )
        assert again.status_code == 409

        mine = await client.get("/api/request-access/me", headers=_auth(staff))
        assert mine.json()["status"] == "approved"
        me = await client.get("/api/auth/me", headers=_auth(staff))
        assert me.json()["requires_approval"] is False

        direct = await client.post("/api/tables", json={"table_number": "30"}, headers=_auth(staff))
        assert direct.status_code == 201


@pytest.mark.asyncio
async def test_menu_item_edits(client_app, db, staff, admin, categories) -> None:
    async with _client(client_app) as client:
        created = await client.post(
            "/api/menu/items",
            json={"name": "Ribeye", "category": "steaks", "price": 72, "country": "ca", "weight_oz": "16"},
            headers=_auth(admin),
        )
        assert created.status_code == 201
        item = created.json()
        assert item["category"] == "steaks"
        assert item["country"] == "CA"
        assert item["weight_oz"] == 16

        proposal = await client.patch(
            f"/api/menu/items/{item['id']}",
            json={"category": "sides"},
            headers=_auth(staff),
        )
        assert proposal.status_code == 202
        request_id = proposal.json()["change_request"]["id"]

        inbox = await client.get("/api/admin/inbox", headers=_auth(admin))
        card = inbox.json()["change_requests"][0]
        assert card["target_name"] == "Ribeye"
        assert "category: steaks → sides" in card["changes"]

        approved = await client.post(f"/api/change-requests/{request_id}/approve", headers=_auth(admin))
        assert approved.status_code == 200

        fetched = await client.get(f"/api/menu/items/{item['id']}", headers=_auth(staff))
        assert fetched.json()["category"] == "sides"
        assert fetched.json()["country"] is None
        assert fetched.json()["weight_oz"] is None

        eighty_six = await client.patch(
            f"/api/menu/items/{item['id']}/availability",
            json={"is_unavailable": True},
            headers=_auth(admin),
        )
        assert eighty_six.json()["is_unavailable"] is True

        listed = await client.get("/api/menu/items?category=sides", headers=_auth(staff))
        assert [i["id"] for i in listed.json()] == [item["id"]]

    assert db.query(MenuItem).one().is_unavailable is True


@pytest.mark.asyncio
async def test_change_request_visibility(client_app, staff, admin) -> None:
    async with _client(client_app) as client:
        submitted = await client.post(
            "/api/change-requests",
            json={"entity_type": "table", "action": "create", "after_data": {"table_number": "40"}},
            headers=_auth(staff),
        )
        assert submitted.status_code == 201
        request_id = submitted.json()["id"]
        assert (await client.get(f"/api/change-requests/{request_id}", headers=_auth(staff))).status_code == 200
        assert (await client.get(f"/api/change-requests/{request_id}", headers=_auth(admin))).status_code == 200
        missing = await client.post("/api/change-requests/nope/approve", headers=_auth(admin))
        assert missing.status_code == 404

        bad = await client.post(
            "/api/change-requests",
            json={"entity_type": "table", "action": "update", "after_data": {"table_number": "40"}},
            headers=_auth(staff),
        )
        assert bad.status_code == 422


@pytest.mark.asyncio
async def test_orders_summary_groups_by_guest(client_app, admin, categories) -> None:
    async with _client(client_app) as client:
        table = (await client.post("/api/tables", json={"table_number": "5"}, headers=_auth(admin))).json()
        guests = (await client.post(f"/api/tables/{table['id']}/guests", json={"guest_count": 2}, headers=_auth(admin))).json()
        assert [g["guest_number"] for g in guests] == [1, 2]
        dish = (await client.post(
            "/api/menu/items",
            json={"name": "Caesar", "category": "appetizers", "price": 19},
            headers=_auth(admin),
        )).json()

        order = (await client.post("/api/orders", json={"table_id": table["id"]}, headers=_auth(admin))).json()
        added = await client.post(
            f"/api/orders/{order['id']}/items",
            json={"menu_item_id": dish["id"], "guest_id": guests[1]["id"], "modifiers": ["no croutons"]},
            headers=_auth(admin),
        )
        assert added.status_code == 201
        assert added.json()["name"] == "Caesar"
        await client.post(f"/api/orders/{order['id']}/items", json={"name": "Bread service"}, headers=_auth(admin))

        summary = (await client.get(f"/api/orders/summary?table_id={table['id']}", headers=_auth(admin))).json()
        assert [g["guest_number"] for g in summary] == [1, 2, None]
        assert summary[0]["items"] == []
        assert summary[1]["items"][0]["modifiers"] == ["no croutons"]
        assert summary[2]["items"][0]["name"] == "Bread service"


@pytest.mark.asyncio
async def test_menu_item_moved_out_of_steaks_by_category_id(client_app, admin, categories) -> None:
    async with _client(client_app) as client:
        created = (await client.post(
            "/api/menu/items",
            json={"name": "Filet", "category": "steaks", "price": 68, "country": "ca", "origin": "Alberta", "weight_oz": 8},
            headers=_auth(admin),
        )).json()
        assert created["country"] == "CA"

        moved = await client.patch(
            f"/api/menu/items/{created['id']}",
            json={"category_id": categories["sides"].id},
            headers=_auth(admin),
        )
        assert moved.status_code == 200
        body = moved.json()
        assert body["category"] == "sides"
        assert (body["country"], body["origin"], body["weight_oz"]) == (None, None, None)
