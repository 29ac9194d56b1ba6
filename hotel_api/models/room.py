"""Room and booking models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, JSON, Text, Enum, Uuid
import enum

from hotel_api.database import Base
from hotel_api.models.user import enum_values


class RoomStatus(str, enum.Enum):
    AVAILABLE = "available"
    MAINTENANCE = "maintenance"
    BOOKED = "booked"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class Room(Base):
    """Hotel rooms"""
    __tablename__ = "rooms"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    room_number = Column(String(20), unique=True, nullable=False)
    type = Column(String(100), nullable=False)  # Standard, Deluxe, Suite, Ocean View, etc.
    capacity = Column(Integer, default=2, nullable=False)
    price_per_night_cents = Column(Integer, nullable=False)
    amenities = Column(JSON, default=list)  # ["wifi", "minibar", ...]
    images = Column(JSON, default=list)  # Image URLs
    description = Column(Text)
    status = Column(
        Enum(RoomStatus, name="room_status", values_callable=enum_values),
        default=RoomStatus.AVAILABLE,
        nullable=False,
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Booking(Base):
    """Room bookings made by guests"""
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(Uuid, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)

    # Stay
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    guests_count = Column(Integer, default=1, nullable=False)

    # Price as computed by the booking flow
    total_price_cents = Column(Integer, nullable=False)
    extras = Column(JSON, default=list)  # ["breakfast", "parking", ...]

    status = Column(
        Enum(BookingStatus, name="booking_status", values_callable=enum_values),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
