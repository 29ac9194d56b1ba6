"""Room booking API endpoints"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.clock import utc_today
from hotel_api.database import get_db
from hotel_api.models.room import Room, RoomStatus, Booking, BookingStatus
from hotel_api.models.user import User
from hotel_api.schemas.room import (
    BookingCreate,
    BookingStatusUpdate,
    BookingResponse,
    BookingListResponse,
)
from hotel_api.api.auth import BACK_OFFICE_ROLES, get_current_active_user, get_user_role, require_role

router = APIRouter()
logger = structlog.get_logger()

# Bookings that still hold their room
HOLDING_STATUSES = [BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN]
CANCELLABLE_STATUSES = [BookingStatus.PENDING, BookingStatus.CONFIRMED]


async def _get_booking(db: AsyncSession, booking_id: UUID) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    booking_data: BookingCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Book a room for the current user"""
    if booking_data.check_out <= booking_data.check_in:
        raise HTTPException(status_code=400, detail="Check-out must be after check-in")

    if booking_data.check_in < utc_today():
        raise HTTPException(status_code=400, detail="Check-in date cannot be in the past")

    result = await db.execute(select(Room).where(Room.id == booking_data.room_id))
    room = result.scalar_one_or_none()

    if not room:
        raise HTTPException(status_code=404, detail="Room not found")

    if room.status != RoomStatus.AVAILABLE:
        raise HTTPException(status_code=400, detail="Room is not available for booking")

    if booking_data.guests_count > room.capacity:
        raise HTTPException(
            status_code=400,
            detail=f"Room {room.room_number} sleeps at most {room.capacity} guests",
        )

    result = await db.execute(
        select(func.count(Booking.id)).where(
            Booking.room_id == room.id,
            Booking.status.in_(HOLDING_STATUSES),
            Booking.check_in < booking_data.check_out,
            Booking.check_out > booking_data.check_in,
        )
    )
    if result.scalar():
        raise HTTPException(status_code=409, detail="Room is already booked for these dates")

    booking = Booking(
        user_id=current_user.id,
        status=BookingStatus.PENDING,
        **booking_data.model_dump(),
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)

    logger.info(
        "Booking created",
        booking_id=str(booking.id),
        user_id=str(current_user.id),
        room_id=str(room.id),
    )
    return booking


@router.get("/mine", response_model=List[BookingResponse])
async def list_my_bookings(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Bookings of the current user, latest stay first"""
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == current_user.id)
        .order_by(Booking.check_in.desc())
    )
    return result.scalars().all()


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    room_id: Optional[UUID] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    current_user: User = Depends(require_role(*BACK_OFFICE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """List all bookings with pagination"""
    query = select(Booking)
    count_query = select(func.count(Booking.id))

    if status:
        query = query.where(Booking.status == status)
        count_query = count_query.where(Booking.status == status)

    if room_id:
        query = query.where(Booking.room_id == room_id)
        count_query = count_query.where(Booking.room_id == room_id)

    if from_date:
        query = query.where(Booking.check_in >= from_date)
        count_query = count_query.where(Booking.check_in >= from_date)

    if to_date:
        query = query.where(Booking.check_in <= to_date)
        count_query = count_query.where(Booking.check_in <= to_date)

    # Get total
    total_result = await db.execute(count_query)
    total = total_result.scalar()

    # Get paginated results
    offset = (page - 1) * page_size
    query = query.order_by(Booking.check_in.desc()).offset(offset).limit(page_size)

    result = await db.execute(query)
    bookings = result.scalars().all()

    return BookingListResponse(
        items=bookings,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Get booking details (owner or back-office)"""
    booking = await _get_booking(db, booking_id)

    if booking.user_id != current_user.id:
        role = await get_user_role(db, current_user.id)
        if role not in BACK_OFFICE_ROLES:
            raise HTTPException(status_code=404, detail="Booking not found")

    return booking


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: UUID,
    status_data: BookingStatusUpdate,
    current_user: User = Depends(require_role(*BACK_OFFICE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Move a booking through confirm / check-in / check-out / cancel"""
    booking = await _get_booking(db, booking_id)
    previous = booking.status
    booking.status = status_data.status

    # Room occupancy follows the guest in, and is released on any move out of checked_in
    entering = status_data.status == BookingStatus.CHECKED_IN
    leaving = previous == BookingStatus.CHECKED_IN
    if status_data.status != previous and (entering or leaving):
        result = await db.execute(select(Room).where(Room.id == booking.room_id))
        room = result.scalar_one_or_none()
        if room is not None:
            if entering:
                room.status = RoomStatus.BOOKED
            elif room.status == RoomStatus.BOOKED:
                room.status = RoomStatus.AVAILABLE

    await db.commit()
    await db.refresh(booking)

    logger.info(
        "Booking status updated",
        booking_id=str(booking.id),
        previous=previous.value,
        status=booking.status.value,
        by=str(current_user.id),
    )
    return booking


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a booking that has not started yet"""
    booking = await _get_booking(db, booking_id)

    if booking.user_id != current_user.id:
        role = await get_user_role(db, current_user.id)
        if role not in BACK_OFFICE_ROLES:
            raise HTTPException(status_code=404, detail="Booking not found")

    if booking.status not in CANCELLABLE_STATUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot cancel a booking that is {booking.status.value}",
        )

    booking.status = BookingStatus.CANCELLED
    await db.commit()
    await db.refresh(booking)

    logger.info("Booking cancelled", booking_id=str(booking.id), by=str(current_user.id))
    return booking
