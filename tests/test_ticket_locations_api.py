"""HTTP tests for /api/ticket-locations."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from eventhub.models import TicketLocation
from tests.factories import auth_headers, make_location, make_user


@pytest_asyncio.fixture
async def accounts(db):
    await make_user(db, "admin-1", is_admin=True)
    await make_user(db, "member-1")


async def location_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(TicketLocation))).scalar_one()


@pytest.mark.asyncio
async def test_list_is_public_and_sorted_by_name(async_client, db):
    await make_location(db, "Westside Box Office")
    await make_location(db, "Arena Kiosk")
    await make_location(db, "Main Street Records")

    response = await async_client.get("/api/ticket-locations")

    assert response.status_code == 200
    assert [location["name"] for location in response.json()] == [
        "Arena Kiosk", "Main Street Records", "Westside Box Office"
    ]


@pytest.mark.asyncio
async def test_admin_creates_location(async_client, db, accounts):
    response = await async_client.post(
        "/api/ticket-locations",
        json={"name": " Harbor Booth ", "address": "12 Pier Rd"},
        headers=auth_headers("admin-1"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Harbor Booth"
    assert body["address"] == "12 Pier Rd"
    assert body["createdAt"] is not None
    assert await location_count(db) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"name": "Only name"}, {"address": "Only address"}, {"name": "", "address": "x"}])
async def test_name_and_address_are_required(async_client, db, accounts, payload):
    response = await async_client.post("/api/ticket-locations", json=payload, headers=auth_headers("admin-1"))

    assert response.status_code == 400
    assert "message" in response.json()
    assert await location_count(db) == 0


@pytest.mark.asyncio
async def test_member_cannot_create(async_client, db, accounts):
    response = await async_client.post(
        "/api/ticket-locations",
        json={"name": "Sneaky", "address": "Nowhere"},
        headers=auth_headers("member-1"),
    )

    assert response.status_code == 403
    assert await location_count(db) == 0


@pytest.mark.asyncio
async def test_admin_deletes_location(async_client, db, accounts):
    location = await make_location(db, "Closing Down")

    response = await async_client.delete(f"/api/ticket-locations/{location.id}", headers=auth_headers("admin-1"))

    assert response.status_code == 200
    assert response.json() == {"message": "Ticket location deleted successfully"}
    assert await location_count(db) == 0


@pytest.mark.asyncio
async def test_delete_missing_location(async_client, accounts):
    response = await async_client.delete("/api/ticket-locations/99", headers=auth_headers("admin-1"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_member_cannot_delete(async_client, db, accounts):
    location = await make_location(db, "Staying")

    response = await async_client.delete(f"/api/ticket-locations/{location.id}", headers=auth_headers("member-1"))

    assert response.status_code == 403
    assert await location_count(db) == 1


@pytest.mark.asyncio
async def test_delete_id_beyond_integer_range(async_client, accounts):
    response = await async_client.delete(
        "/api/ticket-locations/99999999999999999999", headers=auth_headers("admin-1")
    )
    assert response.status_code == 404
    assert response.json() == {"message": "Ticket location not found"}
