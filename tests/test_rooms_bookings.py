"""Tests for rooms and bookings"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from hotel_api.clock import utc_today
from hotel_api.models.room import RoomStatus

from conftest import auth_headers, create_user


def booking_payload(room, check_in, check_out, **overrides):
    payload = {
        "room_id": str(room.id),
        "check_in": check_in.isoformat(),
        "check_out": check_out.isoformat(),
        "guests_count": 2,
        "total_price_cents": room.price_per_night_cents * (check_out - check_in).days,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_list_rooms(client: AsyncClient, test_rooms):
    """Anyone can browse rooms"""
    response = await client.get("/rooms")

    assert response.status_code == 200
    numbers = [room["room_number"] for room in response.json()]
    assert numbers == ["101", "201", "301"]


@pytest.mark.asyncio
async def test_available_rooms_filter_by_guests(client: AsyncClient, test_rooms, test_db):
    test_rooms[2].status = RoomStatus.MAINTENANCE
    await test_db.commit()

    response = await client.get("/rooms/available", params={"guests": 3})

    assert response.status_code == 200
    assert [room["room_number"] for room in response.json()] == ["201"]


@pytest.mark.asyncio
async def test_create_room_admin_only(guest_client: AsyncClient, admin_client: AsyncClient):
    payload = {"room_number": "401", "type": "Ocean View", "capacity": 2, "price_per_night_cents": 25000}

    response = await guest_client.post("/rooms", json=payload)
    assert response.status_code == 403

    response = await admin_client.post("/rooms", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "available"
    assert data["amenities"] == []


@pytest.mark.asyncio
async def test_create_room_duplicate_number(admin_client: AsyncClient, test_rooms):
    response = await admin_client.post(
        "/rooms",
        json={"room_number": "101", "type": "Standard", "price_per_night_cents": 12000},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Room 101 already exists"


@pytest.mark.asyncio
async def test_update_and_delete_room(admin_client: AsyncClient, test_rooms):
    room_id = str(test_rooms[0].id)

    response = await admin_client.put(f"/rooms/{room_id}", json={"status": "maintenance"})
    assert response.status_code == 200
    assert response.json()["status"] == "maintenance"

    response = await admin_client.delete(f"/rooms/{room_id}")
    assert response.status_code == 204

    response = await admin_client.get(f"/rooms/{room_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_room_rejects_null(admin_client: AsyncClient, test_rooms):
    room_id = str(test_rooms[0].id)

    for field in ("type", "price_per_night_cents", "status", "amenities"):
        response = await admin_client.put(f"/rooms/{room_id}", json={field: None})
        assert response.status_code == 422, field

    response = await admin_client.put(f"/rooms/{room_id}", json={"description": None})
    assert response.status_code == 200
    assert response.json()["type"] == "Standard"
    assert response.json()["description"] is None


@pytest.mark.asyncio
async def test_create_booking(guest_client: AsyncClient, guest_user, test_rooms, future_stay):
    """Guests book an available room and start as pending"""
    check_in, check_out = future_stay
    room = test_rooms[0]

    response = await guest_client.post(
        "/bookings",
        json=booking_payload(room, check_in, check_out, extras=["breakfast"]),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["user_id"] == str(guest_user.id)
    assert data["total_price_cents"] == 36000
    assert data["extras"] == ["breakfast"]

    response = await guest_client.get("/bookings/mine")
    assert [booking["id"] for booking in response.json()] == [data["id"]]


@pytest.mark.asyncio
async def test_create_booking_requires_login(client: AsyncClient, test_rooms, future_stay):
    check_in, check_out = future_stay

    response = await client.post("/bookings", json=booking_payload(test_rooms[0], check_in, check_out))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_booking_date_validation(guest_client: AsyncClient, test_rooms, future_stay):
    check_in, check_out = future_stay
    room = test_rooms[0]

    response = await guest_client.post("/bookings", json=booking_payload(room, check_out, check_in))
    assert response.status_code == 400
    assert response.json()["detail"] == "Check-out must be after check-in"

    yesterday = utc_today() - timedelta(days=1)
    response = await guest_client.post(
        "/bookings",
        json=booking_payload(room, yesterday, yesterday + timedelta(days=2)),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Check-in date cannot be in the past"


@pytest.mark.asyncio
async def test_booking_room_rules(guest_client: AsyncClient, test_rooms, test_db, future_stay):
    check_in, check_out = future_stay
    standard, deluxe, suite = test_rooms

    response = await guest_client.post(
        "/bookings",
        json=booking_payload(standard, check_in, check_out, guests_count=3),
    )
    assert response.status_code == 400
    assert "sleeps at most 2" in response.json()["detail"]

    suite.status = RoomStatus.MAINTENANCE
    await test_db.commit()

    response = await guest_client.post("/bookings", json=booking_payload(suite, check_in, check_out))
    assert response.status_code == 400
    assert response.json()["detail"] == "Room is not available for booking"


@pytest.mark.asyncio
async def test_overlapping_booking_conflicts(guest_client: AsyncClient, test_rooms, future_stay):
    check_in, check_out = future_stay
    room = test_rooms[1]

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    assert response.status_code == 201

    response = await guest_client.post(
        "/bookings",
        json=booking_payload(room, check_in + timedelta(days=1), check_out + timedelta(days=1)),
    )
    assert response.status_code == 409

    # Back-to-back stays share the changeover day
    response = await guest_client.post(
        "/bookings",
        json=booking_payload(room, check_out, check_out + timedelta(days=2)),
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_cancelled_booking_frees_dates(guest_client: AsyncClient, test_rooms, future_stay):
    check_in, check_out = future_stay
    room = test_rooms[0]

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    booking_id = response.json()["id"]

    response = await guest_client.post(f"/bookings/{booking_id}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    response = await guest_client.post(f"/bookings/{booking_id}/cancel")
    assert response.status_code == 400

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_booking_hidden_from_other_guests(
    guest_client: AsyncClient, client: AsyncClient, test_db, test_rooms, future_stay
):
    check_in, check_out = future_stay
    response = await guest_client.post("/bookings", json=booking_payload(test_rooms[0], check_in, check_out))
    booking_id = response.json()["id"]

    other = await create_user(test_db, "other.guest@example.com")
    response = await client.get(f"/bookings/{booking_id}", headers=auth_headers(other))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_staff_moves_booking_through_stay(
    guest_client: AsyncClient, staff_client: AsyncClient, test_rooms, future_stay
):
    """Check-in occupies the room, check-out releases it"""
    check_in, check_out = future_stay
    room = test_rooms[0]

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    booking_id = response.json()["id"]

    response = await guest_client.patch(f"/bookings/{booking_id}/status", json={"status": "confirmed"})
    assert response.status_code == 403

    for status in ("confirmed", "checked_in"):
        response = await staff_client.patch(f"/bookings/{booking_id}/status", json={"status": status})
        assert response.status_code == 200
        assert response.json()["status"] == status

    response = await staff_client.get(f"/rooms/{room.id}")
    assert response.json()["status"] == "booked"

    response = await guest_client.post(f"/bookings/{booking_id}/cancel")
    assert response.status_code == 400

    response = await staff_client.patch(f"/bookings/{booking_id}/status", json={"status": "checked_out"})
    assert response.status_code == 200

    response = await staff_client.get(f"/rooms/{room.id}")
    assert response.json()["status"] == "available"


@pytest.mark.asyncio
async def test_cancelling_checked_in_booking_releases_room(
    guest_client: AsyncClient, staff_client: AsyncClient, test_rooms, future_stay
):
    check_in, check_out = future_stay
    room = test_rooms[0]

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    booking_id = response.json()["id"]

    for status in ("confirmed", "checked_in", "cancelled"):
        response = await staff_client.patch(f"/bookings/{booking_id}/status", json={"status": status})
        assert response.status_code == 200

    response = await staff_client.get(f"/rooms/{room.id}")
    assert response.json()["status"] == "available"

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_undoing_check_in_releases_room(
    guest_client: AsyncClient, staff_client: AsyncClient, test_rooms, future_stay
):
    check_in, check_out = future_stay
    room = test_rooms[1]

    response = await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))
    booking_id = response.json()["id"]

    await staff_client.patch(f"/bookings/{booking_id}/status", json={"status": "checked_in"})
    response = await staff_client.patch(f"/bookings/{booking_id}/status", json={"status": "confirmed"})
    assert response.status_code == 200

    response = await staff_client.get(f"/rooms/{room.id}")
    assert response.json()["status"] == "available"


@pytest.mark.asyncio
async def test_list_bookings_back_office(
    guest_client: AsyncClient, admin_client: AsyncClient, test_rooms, future_stay
):
    check_in, check_out = future_stay
    for room in test_rooms[:2]:
        await guest_client.post("/bookings", json=booking_payload(room, check_in, check_out))

    response = await guest_client.get("/bookings")
    assert response.status_code == 403

    response = await admin_client.get("/bookings", params={"page_size": 1})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert len(data["items"]) == 1

    response = await admin_client.get("/bookings", params={"room_id": str(test_rooms[1].id)})
    assert response.json()["total"] == 1
