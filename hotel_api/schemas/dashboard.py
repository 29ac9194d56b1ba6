"""Dashboard schemas"""

from typing import Optional, List
from pydantic import BaseModel

from hotel_api.schemas.room import BookingResponse
from hotel_api.schemas.reservation import ReservationResponse
from hotel_api.schemas.event import EventResponse


class AdminStats(BaseModel):
    """Headline figures for the back-office dashboard"""
    total_bookings: int
    total_rooms: int
    occupancy_rate: float  # percent, 0-100
    revenue_today_cents: int
    active_guests: int
    pending_reservations: int


class AdminDashboardResponse(BaseModel):
    """Back-office dashboard"""
    stats: AdminStats
    todays_check_ins: List[BookingResponse]
    todays_check_outs: List[BookingResponse]


class GuestDashboardResponse(BaseModel):
    """Guest portal overview"""
    current_stay: Optional[BookingResponse]
    upcoming_bookings: List[BookingResponse]
    past_stays: List[BookingResponse]
    upcoming_reservations: List[ReservationResponse]
    registered_events: List[EventResponse]
