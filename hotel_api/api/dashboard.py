"""Back-office and guest dashboard endpoints"""

from datetime import datetime, time, timedelta

from fastapi import APIRouter, Depends
from sqlalchemy import select, func, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.clock import utc_today
from hotel_api.database import get_db
from hotel_api.models.event import Event, EventRegistration
from hotel_api.models.room import Room, Booking, BookingStatus
from hotel_api.models.reservation import TableReservation, ReservationStatus
from hotel_api.models.user import User
from hotel_api.schemas.dashboard import AdminStats, AdminDashboardResponse, GuestDashboardResponse
from hotel_api.api.auth import BACK_OFFICE_ROLES, get_current_active_user, require_role
from hotel_api.api.events import to_responses

router = APIRouter()

# Bookings that occupy (or are about to occupy) their room
STAYING_STATUSES = [BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN]


@router.get("/admin", response_model=AdminDashboardResponse)
async def admin_dashboard(
    current_user: User = Depends(require_role(*BACK_OFFICE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Headline figures plus today's arrivals and departures"""
    today = utc_today()
    day_start = datetime.combine(today, time.min)
    day_end = day_start + timedelta(days=1)

    total_bookings = (await db.execute(select(func.count(Booking.id)))).scalar()
    total_rooms = (await db.execute(select(func.count(Room.id)))).scalar()

    occupied_rooms = (await db.execute(
        select(func.count(distinct(Booking.room_id))).where(
            Booking.status.in_(STAYING_STATUSES),
            Booking.check_in <= today,
            Booking.check_out > today,
        )
    )).scalar()

    revenue_today = (await db.execute(
        select(func.coalesce(func.sum(Booking.total_price_cents), 0)).where(
            Booking.status != BookingStatus.CANCELLED,
            Booking.created_at >= day_start,
            Booking.created_at < day_end,
        )
    )).scalar()

    active_guests = (await db.execute(
        select(func.count(Booking.id)).where(Booking.status == BookingStatus.CHECKED_IN)
    )).scalar()

    pending_reservations = (await db.execute(
        select(func.count(TableReservation.id)).where(
            TableReservation.status == ReservationStatus.PENDING
        )
    )).scalar()

    check_ins = (await db.execute(
        select(Booking)
        .where(
            Booking.check_in == today,
            Booking.status.in_([BookingStatus.PENDING, BookingStatus.CONFIRMED]),
        )
        .order_by(Booking.created_at)
    )).scalars().all()

    check_outs = (await db.execute(
        select(Booking)
        .where(Booking.check_out == today, Booking.status == BookingStatus.CHECKED_IN)
        .order_by(Booking.created_at)
    )).scalars().all()

    occupancy_rate = round(occupied_rooms * 100.0 / total_rooms, 1) if total_rooms else 0.0

    return AdminDashboardResponse(
        stats=AdminStats(
            total_bookings=total_bookings,
            total_rooms=total_rooms,
            occupancy_rate=occupancy_rate,
            revenue_today_cents=revenue_today,
            active_guests=active_guests,
            pending_reservations=pending_reservations,
        ),
        todays_check_ins=check_ins,
        todays_check_outs=check_outs,
    )


@router.get("/guest", response_model=GuestDashboardResponse)
async def guest_dashboard(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Current stay, upcoming plans and history for the signed-in guest"""
    today = utc_today()

    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == current_user.id)
        .order_by(Booking.check_in)
    )
    bookings = result.scalars().all()

    current_stay = None
    upcoming = []
    past = []
    for booking in bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        if booking.status == BookingStatus.CHECKED_OUT or booking.check_out <= today:
            past.append(booking)
        elif current_stay is None and booking.check_in <= today and booking.status in STAYING_STATUSES:
            current_stay = booking
        else:
            # Not yet started, or still awaiting confirmation
            upcoming.append(booking)
    past.reverse()

    result = await db.execute(
        select(TableReservation)
        .where(
            TableReservation.user_id == current_user.id,
            TableReservation.date >= today,
            TableReservation.status.in_([ReservationStatus.PENDING, ReservationStatus.CONFIRMED]),
        )
        .order_by(TableReservation.date, TableReservation.time)
    )
    reservations = result.scalars().all()

    result = await db.execute(
        select(Event)
        .join(EventRegistration, EventRegistration.event_id == Event.id)
        .where(EventRegistration.user_id == current_user.id, Event.date >= datetime.utcnow())
        .order_by(Event.date)
    )
    events = await to_responses(db, result.scalars().all())

    return GuestDashboardResponse(
        current_stay=current_stay,
        upcoming_bookings=upcoming,
        past_stays=past,
        upcoming_reservations=reservations,
        registered_events=events,
    )
