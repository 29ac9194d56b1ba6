#!/usr/bin/env python3
"""
Seed script to create a demo hotel: admin account, rooms, menu, events,
services and a running promotion.

Run `alembic upgrade head` first.
"""

import asyncio
import uuid
from datetime import datetime, timedelta

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from hotel_api.clock import utc_today
    from hotel_api.database import SessionLocal
    from hotel_api.models.user import AppRole, User, Profile, UserRoleAssignment
    from hotel_api.models.room import Room
    from hotel_api.models.menu import MenuItem
    from hotel_api.models.event import Event
    from hotel_api.models.offer import Promotion, Service

    async with SessionLocal() as db:
        # Check if demo data already exists
        result = await db.execute(select(User).where(User.email == "admin@hotel.local"))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating admin account...")

        admin = User(
            id=uuid.uuid4(),
            email="admin@hotel.local",
            hashed_password=pwd_context.hash("admin123"),
            email_confirmed_at=datetime.utcnow(),
        )
        db.add(admin)
        await db.flush()
        db.add(Profile(user_id=admin.id, full_name="Hotel Administrator"))
        db.add(UserRoleAssignment(user_id=admin.id, role=AppRole.ADMIN))

        guest = User(
            id=uuid.uuid4(),
            email="guest@hotel.local",
            hashed_password=pwd_context.hash("guest123"),
            email_confirmed_at=datetime.utcnow(),
        )
        db.add(guest)
        await db.flush()
        db.add(Profile(user_id=guest.id, full_name="Demo Guest", phone="+15551234567"))
        db.add(UserRoleAssignment(user_id=guest.id, role=AppRole.GUEST))

        print("Creating rooms...")

        rooms_data = [
            ("101", "Standard", 2, 12000, ["wifi", "tv"]),
            ("102", "Standard", 2, 12000, ["wifi", "tv"]),
            ("201", "Deluxe", 3, 18000, ["wifi", "tv", "minibar"]),
            ("202", "Deluxe", 3, 18000, ["wifi", "tv", "minibar"]),
            ("301", "Ocean View", 2, 24000, ["wifi", "tv", "minibar", "balcony"]),
            ("401", "Suite", 4, 42000, ["wifi", "tv", "minibar", "balcony", "jacuzzi"]),
        ]

        for room_number, room_type, capacity, price, amenities in rooms_data:
            db.add(Room(
                room_number=room_number,
                type=room_type,
                capacity=capacity,
                price_per_night_cents=price,
                amenities=amenities,
                images=[],
                description=f"{room_type} room {room_number}",
            ))

        print("Creating menu items...")

        menu_items = [
            ("Burrata", "Heirloom tomatoes, basil oil", 1400, "Starters"),
            ("Tuna Tartare", "Avocado, sesame, lime", 1800, "Starters"),
            ("Grilled Sea Bass", "Lemon butter, seasonal greens", 3400, "Mains"),
            ("Beef Tenderloin", "Truffle mash, red wine jus", 4200, "Mains"),
            ("Mushroom Risotto", "Parmesan, thyme", 2600, "Mains"),
            ("Tiramisu", "Mascarpone, espresso", 1100, "Desserts"),
            ("House Red", "Glass", 1200, "Drinks"),
        ]

        for name, description, price, category in menu_items:
            db.add(MenuItem(name=name, description=description, price_cents=price, category=category))

        print("Creating events, services and promotions...")

        db.add(Event(
            name="Wine Tasting Evening",
            description="Five regional wines with paired canapés",
            date=datetime.combine(utc_today() + timedelta(days=14), datetime.min.time()) + timedelta(hours=19),
            price_cents=4500,
            capacity=30,
        ))

        services = [
            ("Airport Transfer", "Private car to or from the airport", 6000, "Transport"),
            ("Spa Massage", "60 minute full body massage", 9500, "Wellness"),
            ("Laundry", "Same-day wash and press", 2500, "Housekeeping"),
        ]
        for name, description, price, category in services:
            db.add(Service(name=name, description=description, price_cents=price, category=category))

        db.add(Promotion(
            name="Early Summer",
            description="15% off Deluxe and Suite stays",
            discount_percent=15,
            start_date=utc_today(),
            end_date=utc_today() + timedelta(days=30),
            applicable_room_types=["Deluxe", "Suite"],
            applicable_services=[],
        ))

        await db.commit()

        print(f"""
Demo data created successfully!

Users:
  Admin:
    Email: admin@hotel.local
    Password: admin123

  Guest:
    Email: guest@hotel.local
    Password: guest123

Rooms: {len(rooms_data)} created
Menu: {len(menu_items)} items created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
