"""Pydantic schemas for request/response validation"""

from hotel_api.schemas.auth import (
    Token,
    SignupRequest,
    RefreshRequest,
    UserResponse,
    ProfileResponse,
    ProfileUpdate,
    SessionResponse,
)
from hotel_api.schemas.room import (
    RoomCreate,
    RoomUpdate,
    RoomResponse,
    BookingCreate,
    BookingStatusUpdate,
    BookingResponse,
    BookingListResponse,
)
from hotel_api.schemas.menu import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
)
from hotel_api.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from hotel_api.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventRegistrationResponse,
)
from hotel_api.schemas.offer import (
    PromotionCreate,
    PromotionUpdate,
    PromotionResponse,
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
)
from hotel_api.schemas.dashboard import (
    AdminStats,
    AdminDashboardResponse,
    GuestDashboardResponse,
)

__all__ = [
    "Token",
    "SignupRequest",
    "RefreshRequest",
    "UserResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "SessionResponse",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "BookingCreate",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookingListResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservationListResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "EventRegistrationResponse",
    "PromotionCreate",
    "PromotionUpdate",
    "PromotionResponse",
    "ServiceCreate",
    "ServiceUpdate",
    "ServiceResponse",
    "AdminStats",
    "AdminDashboardResponse",
    "GuestDashboardResponse",
]
