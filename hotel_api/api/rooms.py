"""Room management API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.database import get_db
from hotel_api.models.room import Room, RoomStatus
from hotel_api.models.user import AppRole, User
from hotel_api.schemas.room import RoomCreate, RoomUpdate, RoomResponse
from hotel_api.api.auth import require_role

router = APIRouter()
logger = structlog.get_logger()


async def _get_room(db: AsyncSession, room_id: UUID) -> Room:
    result = await db.execute(select(Room).where(Room.id == room_id))
    room = result.scalar_one_or_none()
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


async def _ensure_room_number_free(db: AsyncSession, room_number: str, room_id: Optional[UUID] = None):
    query = select(Room.id).where(Room.room_number == room_number)
    if room_id is not None:
        query = query.where(Room.id != room_id)
    result = await db.execute(query)
    if result.first():
        raise HTTPException(status_code=400, detail=f"Room {room_number} already exists")


@router.get("", response_model=List[RoomResponse])
async def list_rooms(
    status: Optional[RoomStatus] = None,
    type: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """List rooms ordered by room number"""
    query = select(Room)

    if status:
        query = query.where(Room.status == status)

    if type:
        query = query.where(Room.type == type)

    result = await db.execute(query.order_by(Room.room_number))
    return result.scalars().all()


@router.get("/available", response_model=List[RoomResponse])
async def list_available_rooms(
    guests: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    """Rooms open for booking, cheapest first"""
    query = select(Room).where(Room.status == RoomStatus.AVAILABLE)

    if guests:
        query = query.where(Room.capacity >= guests)

    result = await db.execute(query.order_by(Room.price_per_night_cents, Room.room_number))
    return result.scalars().all()


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific room"""
    return await _get_room(db, room_id)


@router.post("", response_model=RoomResponse, status_code=201)
async def create_room(
    room_data: RoomCreate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create a new room"""
    await _ensure_room_number_free(db, room_data.room_number)

    room = Room(**room_data.model_dump())
    db.add(room)
    await db.commit()
    await db.refresh(room)

    logger.info("Room created", room_id=str(room.id), room_number=room.room_number)
    return room


@router.put("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: UUID,
    room_data: RoomUpdate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update a room"""
    room = await _get_room(db, room_id)

    updates = room_data.model_dump(exclude_unset=True)
    if updates.get("room_number") and updates["room_number"] != room.room_number:
        await _ensure_room_number_free(db, updates["room_number"], room_id=room.id)

    for field, value in updates.items():
        setattr(room, field, value)

    await db.commit()
    await db.refresh(room)

    logger.info("Room updated", room_id=str(room.id))
    return room


@router.delete("/{room_id}", status_code=204)
async def delete_room(
    room_id: UUID,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a room"""
    room = await _get_room(db, room_id)
    await db.delete(room)
    await db.commit()

    logger.info("Room deleted", room_id=str(room_id))
