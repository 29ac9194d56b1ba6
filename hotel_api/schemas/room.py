"""Room and booking schemas"""

import datetime as dt
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from hotel_api.schemas.common import UpdateModel
from hotel_api.models.room import RoomStatus, BookingStatus


class RoomCreate(BaseModel):
    """Create room request"""
    room_number: str
    type: str
    capacity: int = Field(2, ge=1)
    price_per_night_cents: int = Field(..., ge=0)
    amenities: List[str] = []
    images: List[str] = []
    description: Optional[str] = None
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(UpdateModel):
    """Update room request"""
    non_nullable = (
        "room_number", "type", "capacity", "price_per_night_cents",
        "amenities", "images", "status",
    )

    room_number: Optional[str] = None
    type: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    price_per_night_cents: Optional[int] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    description: Optional[str] = None
    status: Optional[RoomStatus] = None


class RoomResponse(BaseModel):
    """Room response"""
    id: UUID
    room_number: str
    type: str
    capacity: int
    price_per_night_cents: int
    amenities: List[str]
    images: List[str]
    description: Optional[str]
    status: RoomStatus
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class BookingCreate(BaseModel):
    """Create booking request"""
    room_id: UUID
    check_in: dt.date
    check_out: dt.date
    guests_count: int = Field(1, ge=1)
    total_price_cents: int = Field(..., ge=0)
    extras: List[str] = []
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    """Change a booking's status"""
    status: BookingStatus


class BookingResponse(BaseModel):
    """Booking response"""
    id: UUID
    user_id: UUID
    room_id: UUID
    check_in: dt.date
    check_out: dt.date
    guests_count: int
    total_price_cents: int
    extras: List[str]
    status: BookingStatus
    notes: Optional[str]
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class BookingListResponse(BaseModel):
    """Paginated booking list"""
    items: List[BookingResponse]
    total: int
    page: int
    page_size: int
