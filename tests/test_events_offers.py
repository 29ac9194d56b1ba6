"""Tests for events, promotions and hotel services"""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from hotel_api.clock import utc_today
from hotel_api.models.event import Event
from hotel_api.models.offer import Promotion, Service

from conftest import auth_headers, create_user


@pytest.fixture
async def wine_tasting(test_db):
    """Upcoming event with a single seat"""
    event = Event(
        name="Wine Tasting",
        description="Local vineyards",
        date=datetime.utcnow() + timedelta(days=3),
        price_cents=4500,
        capacity=1,
    )
    test_db.add(event)
    await test_db.commit()
    return event


@pytest.mark.asyncio
async def test_list_upcoming_events(client: AsyncClient, test_db, wine_tasting):
    test_db.add(Event(name="Last Week's Gala", date=datetime.utcnow() - timedelta(days=7)))
    await test_db.commit()

    response = await client.get("/events")
    assert response.status_code == 200
    assert [event["name"] for event in response.json()] == ["Wine Tasting"]

    response = await client.get("/events", params={"include_past": True})
    assert [event["name"] for event in response.json()] == ["Last Week's Gala", "Wine Tasting"]


@pytest.mark.asyncio
async def test_event_admin_crud(admin_client: AsyncClient, guest_client: AsyncClient):
    payload = {
        "name": "Jazz Night",
        "date": (datetime.utcnow() + timedelta(days=10)).replace(microsecond=0).isoformat(),
        "price_cents": 2000,
    }

    response = await guest_client.post("/events", json=payload)
    assert response.status_code == 403

    response = await admin_client.post("/events", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["capacity"] == 0
    assert data["registered_count"] == 0

    response = await admin_client.put(f"/events/{data['id']}", json={"capacity": 40})
    assert response.json()["capacity"] == 40

    response = await admin_client.put(f"/events/{data['id']}", json={"date": None})
    assert response.status_code == 422

    response = await admin_client.put(f"/events/{data['id']}", json={"image_url": None})
    assert response.status_code == 200
    assert response.json()["name"] == "Jazz Night"

    response = await admin_client.delete(f"/events/{data['id']}")
    assert response.status_code == 204

    response = await admin_client.get(f"/events/{data['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_for_event(guest_client: AsyncClient, guest_user, wine_tasting):
    response = await guest_client.post(f"/events/{wine_tasting.id}/register")

    assert response.status_code == 201
    assert response.json()["user_id"] == str(guest_user.id)

    response = await guest_client.get(f"/events/{wine_tasting.id}")
    assert response.json()["registered_count"] == 1

    response = await guest_client.post(f"/events/{wine_tasting.id}/register")
    assert response.status_code == 400
    assert response.json()["detail"] == "Already registered for this event"


@pytest.mark.asyncio
async def test_full_event_rejects_registration(
    guest_client: AsyncClient, client: AsyncClient, test_db, wine_tasting
):
    await guest_client.post(f"/events/{wine_tasting.id}/register")
    other = await create_user(test_db, "late@example.com")

    response = await client.post(
        f"/events/{wine_tasting.id}/register",
        headers=auth_headers(other),
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Event is full"


@pytest.mark.asyncio
async def test_unregister_frees_seat(guest_client: AsyncClient, wine_tasting):
    await guest_client.post(f"/events/{wine_tasting.id}/register")

    response = await guest_client.delete(f"/events/{wine_tasting.id}/register")
    assert response.status_code == 204

    response = await guest_client.delete(f"/events/{wine_tasting.id}/register")
    assert response.status_code == 404

    response = await guest_client.get(f"/events/{wine_tasting.id}")
    assert response.json()["registered_count"] == 0


@pytest.fixture
async def promotions(test_db):
    today = utc_today()
    items = [
        Promotion(name="Autumn Escape", discount_percent=15, start_date=today - timedelta(days=1), end_date=today + timedelta(days=30)),
        Promotion(name="Spring Preview", discount_percent=10, start_date=today + timedelta(days=60), end_date=today + timedelta(days=90)),
        Promotion(name="Paused Deal", discount_percent=20, start_date=today, end_date=today, active=False),
    ]
    for item in items:
        test_db.add(item)
    await test_db.commit()
    return items


@pytest.mark.asyncio
async def test_list_current_promotions(client: AsyncClient, promotions):
    response = await client.get("/promotions")

    assert response.status_code == 200
    assert [promotion["name"] for promotion in response.json()] == ["Autumn Escape"]


@pytest.mark.asyncio
async def test_all_promotions_admin_only(
    admin_client: AsyncClient, guest_client: AsyncClient, promotions
):
    response = await guest_client.get("/promotions", params={"all": True})
    assert len(response.json()) == 1

    response = await admin_client.get("/promotions", params={"all": True})
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_promotion_date_window(admin_client: AsyncClient, promotions):
    today = utc_today()

    response = await admin_client.post(
        "/promotions",
        json={"name": "Backwards", "start_date": today.isoformat(), "end_date": (today - timedelta(days=1)).isoformat()},
    )
    assert response.status_code == 422

    response = await admin_client.put(
        f"/promotions/{promotions[0].id}",
        json={"end_date": (today - timedelta(days=5)).isoformat()},
    )
    assert response.status_code == 400

    response = await admin_client.put(
        f"/promotions/{promotions[0].id}",
        json={"discount_percent": 25},
    )
    assert response.status_code == 200
    assert response.json()["discount_percent"] == 25


@pytest.mark.asyncio
async def test_promotion_update_checks_merged_dates(admin_client: AsyncClient, promotions):
    """A new start_date is checked against the stored end_date"""
    spring = promotions[1]

    response = await admin_client.put(
        f"/promotions/{spring.id}",
        json={"start_date": (spring.end_date + timedelta(days=1)).isoformat()},
    )
    assert response.status_code == 400

    for field in ("start_date", "end_date", "name", "active"):
        response = await admin_client.put(f"/promotions/{spring.id}", json={field: None})
        assert response.status_code == 422, field

    response = await admin_client.get("/promotions", params={"all": True})
    stored = next(item for item in response.json() if item["id"] == str(spring.id))
    assert stored["start_date"] == spring.start_date.isoformat()
    assert stored["end_date"] == spring.end_date.isoformat()


@pytest.mark.asyncio
async def test_delete_promotion(admin_client: AsyncClient, promotions):
    response = await admin_client.delete(f"/promotions/{promotions[0].id}")
    assert response.status_code == 204

    response = await admin_client.delete(f"/promotions/{promotions[0].id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_services(client: AsyncClient, admin_client: AsyncClient, test_db):
    test_db.add(Service(name="Laundry", price_cents=1500, category="Housekeeping", available=False))
    await test_db.commit()

    response = await admin_client.post(
        "/services",
        json={"name": "Deep Tissue Massage", "price_cents": 9000, "category": "Spa"},
    )
    assert response.status_code == 201
    service_id = response.json()["id"]

    response = await client.get("/services")
    assert [service["name"] for service in response.json()] == ["Deep Tissue Massage"]

    response = await client.get("/services", params={"include_unavailable": True})
    assert [service["name"] for service in response.json()] == ["Laundry", "Deep Tissue Massage"]

    response = await admin_client.put(f"/services/{service_id}", json={"price_cents": 9500})
    assert response.json()["price_cents"] == 9500

    response = await admin_client.put(f"/services/{service_id}", json={"available": None})
    assert response.status_code == 422

    response = await admin_client.delete(f"/services/{service_id}")
    assert response.status_code == 204
