"""Test configuration and fixtures"""

import os

# Keep the application engine off Postgres during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hotel_api.clock import utc_today
from hotel_api.main import app
from hotel_api.database import Base, get_db
from hotel_api.models.user import AppRole, User, Profile, UserRoleAssignment
from hotel_api.models.room import Room
from hotel_api.models.menu import MenuItem
from hotel_api.api.auth import get_password_hash, create_access_token


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


async def create_user(db, email, password="testpass123", role=AppRole.GUEST, full_name="Test User", with_profile=True):
    """Create an account with (optionally) a profile and a role row"""
    user = User(
        id=uuid4(),
        email=email,
        hashed_password=get_password_hash(password),
        email_confirmed_at=datetime.utcnow(),
        is_active=True,
    )
    db.add(user)
    await db.flush()

    if with_profile:
        db.add(Profile(user_id=user.id, full_name=full_name))
    if role is not None:
        db.add(UserRoleAssignment(user_id=user.id, role=role))

    await db.commit()
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
async def admin_user(test_db):
    """Create an admin user"""
    return await create_user(test_db, "admin@example.com", "adminpass123", AppRole.ADMIN, "Admin User")


@pytest.fixture
async def staff_user(test_db):
    """Create a staff user"""
    return await create_user(test_db, "staff@example.com", "staffpass123", AppRole.STAFF, "Staff User")


@pytest.fixture
async def guest_user(test_db):
    """Create a guest user"""
    return await create_user(test_db, "guest@example.com", "guestpass123", AppRole.GUEST, "Guest User")


@pytest.fixture
async def test_rooms(test_db):
    """Create test rooms"""
    rooms = [
        Room(room_number="101", type="Standard", capacity=2, price_per_night_cents=12000, amenities=["wifi"], images=[]),
        Room(room_number="201", type="Deluxe", capacity=3, price_per_night_cents=18000, amenities=["wifi", "minibar"], images=[]),
        Room(room_number="301", type="Suite", capacity=4, price_per_night_cents=42000, amenities=[], images=[]),
    ]

    for room in rooms:
        test_db.add(room)

    await test_db.commit()
    return rooms


@pytest.fixture
async def test_menu_items(test_db):
    """Create test menu items"""
    items = [
        MenuItem(name="Tiramisu", description="Mascarpone, espresso", price_cents=1100, category="Desserts"),
        MenuItem(name="Sea Bass", description="Lemon butter", price_cents=3400, category="Mains"),
        MenuItem(name="Burrata", description="Heirloom tomatoes", price_cents=1400, category="Starters", available=False),
    ]

    for item in items:
        test_db.add(item)

    await test_db.commit()
    return items


@pytest.fixture
def future_stay():
    """Check-in/check-out dates a week from now"""
    check_in = utc_today() + timedelta(days=7)
    return check_in, check_in + timedelta(days=3)


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(client, admin_user):
    """Create admin authenticated test client"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers(admin_user),
    ) as admin_client:
        yield admin_client


@pytest.fixture
async def staff_client(client, staff_user):
    """Create staff authenticated test client"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers(staff_user),
    ) as staff_client:
        yield staff_client


@pytest.fixture
async def guest_client(client, guest_user):
    """Create guest authenticated test client"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers(guest_user),
    ) as guest_client:
        yield guest_client
