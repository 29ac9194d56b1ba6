"""Table reservation schemas"""

import datetime as dt
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from hotel_api.schemas.common import UpdateModel
from hotel_api.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    """Create table reservation request"""
    date: dt.date
    time: dt.time
    guests: int = Field(2, ge=1, le=20)
    notes: Optional[str] = None


class ReservationUpdate(UpdateModel):
    """Update reservation request (back-office)"""
    non_nullable = ("status",)

    status: Optional[ReservationStatus] = None
    table_number: Optional[str] = None


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    user_id: UUID
    date: dt.date
    time: dt.time
    guests: int
    table_number: Optional[str]
    status: ReservationStatus
    notes: Optional[str]
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    """Paginated reservation list"""
    items: List[ReservationResponse]
    total: int
    page: int
    page_size: int
