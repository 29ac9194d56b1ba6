"""Restaurant table reservation API endpoints"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.clock import utc_today
from hotel_api.database import get_db
from hotel_api.models.reservation import TableReservation, ReservationStatus
from hotel_api.models.user import User
from hotel_api.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from hotel_api.api.auth import BACK_OFFICE_ROLES, get_current_active_user, get_user_role, require_role

router = APIRouter()
logger = structlog.get_logger()

CANCELLABLE_STATUSES = [ReservationStatus.PENDING, ReservationStatus.CONFIRMED]


async def _get_reservation(db: AsyncSession, reservation_id: UUID) -> TableReservation:
    result = await db.execute(
        select(TableReservation).where(TableReservation.id == reservation_id)
    )
    reservation = result.scalar_one_or_none()
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Reserve a table for the current user"""
    if reservation_data.date < utc_today():
        raise HTTPException(status_code=400, detail="Reservation date cannot be in the past")

    reservation = TableReservation(
        user_id=current_user.id,
        date=reservation_data.date,
        time=reservation_data.time,
        guests=reservation_data.guests,
        notes=reservation_data.notes,
        status=ReservationStatus.PENDING,
    )

    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)

    logger.info(
        "Table reservation created",
        reservation_id=str(reservation.id),
        user_id=str(current_user.id),
        guests=reservation.guests,
    )
    return reservation


@router.get("/mine", response_model=List[ReservationResponse])
async def list_my_reservations(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Reservations of the current user"""
    result = await db.execute(
        select(TableReservation)
        .where(TableReservation.user_id == current_user.id)
        .order_by(TableReservation.date.desc(), TableReservation.time.desc())
    )
    return result.scalars().all()


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    status: Optional[ReservationStatus] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    current_user: User = Depends(require_role(*BACK_OFFICE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """List reservations in date order with pagination"""
    query = select(TableReservation)
    count_query = select(func.count(TableReservation.id))

    if status:
        query = query.where(TableReservation.status == status)
        count_query = count_query.where(TableReservation.status == status)

    if from_date:
        query = query.where(TableReservation.date >= from_date)
        count_query = count_query.where(TableReservation.date >= from_date)

    if to_date:
        query = query.where(TableReservation.date <= to_date)
        count_query = count_query.where(TableReservation.date <= to_date)

    # Get total
    total_result = await db.execute(count_query)
    total = total_result.scalar()

    # Get paginated results
    offset = (page - 1) * page_size
    query = (
        query.order_by(TableReservation.date, TableReservation.time)
        .offset(offset)
        .limit(page_size)
    )

    result = await db.execute(query)
    reservations = result.scalars().all()

    return ReservationListResponse(
        items=reservations,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: UUID,
    reservation_data: ReservationUpdate,
    current_user: User = Depends(require_role(*BACK_OFFICE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Confirm, cancel or complete a reservation, or assign a table"""
    reservation = await _get_reservation(db, reservation_id)

    for field, value in reservation_data.model_dump(exclude_unset=True).items():
        setattr(reservation, field, value)

    await db.commit()
    await db.refresh(reservation)

    logger.info(
        "Reservation updated",
        reservation_id=str(reservation.id),
        status=reservation.status.value,
        by=str(current_user.id),
    )
    return reservation


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a pending or confirmed reservation"""
    reservation = await _get_reservation(db, reservation_id)

    if reservation.user_id != current_user.id:
        role = await get_user_role(db, current_user.id)
        if role not in BACK_OFFICE_ROLES:
            raise HTTPException(status_code=404, detail="Reservation not found")

    if reservation.status not in CANCELLABLE_STATUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot cancel a reservation that is {reservation.status.value}",
        )

    reservation.status = ReservationStatus.CANCELLED
    await db.commit()
    await db.refresh(reservation)

    return reservation
