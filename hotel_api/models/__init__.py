"""Database models"""

from hotel_api.models.user import AppRole, User, Profile, UserRoleAssignment
from hotel_api.models.room import Room, RoomStatus, Booking, BookingStatus
from hotel_api.models.menu import MenuItem
from hotel_api.models.reservation import TableReservation, ReservationStatus
from hotel_api.models.event import Event, EventRegistration
from hotel_api.models.offer import Promotion, Service
from hotel_api.models.audit import AuditLog

__all__ = [
    "AppRole",
    "User",
    "Profile",
    "UserRoleAssignment",
    "Room",
    "RoomStatus",
    "Booking",
    "BookingStatus",
    "MenuItem",
    "TableReservation",
    "ReservationStatus",
    "Event",
    "EventRegistration",
    "Promotion",
    "Service",
    "AuditLog",
]
