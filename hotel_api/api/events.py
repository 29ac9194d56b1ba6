"""Hotel events API endpoints"""

from datetime import datetime
from typing import Dict, List, Sequence
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.database import get_db
from hotel_api.models.event import Event, EventRegistration
from hotel_api.models.user import AppRole, User
from hotel_api.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventRegistrationResponse,
)
from hotel_api.api.auth import get_current_active_user, require_role

router = APIRouter()
logger = structlog.get_logger()


async def registration_counts(db: AsyncSession, event_ids: Sequence[UUID]) -> Dict[UUID, int]:
    """Number of registrations per event"""
    if not event_ids:
        return {}
    result = await db.execute(
        select(EventRegistration.event_id, func.count(EventRegistration.id))
        .where(EventRegistration.event_id.in_(event_ids))
        .group_by(EventRegistration.event_id)
    )
    return {event_id: count for event_id, count in result.all()}


async def to_responses(db: AsyncSession, events: Sequence[Event]) -> List[EventResponse]:
    counts = await registration_counts(db, [event.id for event in events])
    return [
        EventResponse.model_validate(event).model_copy(
            update={"registered_count": counts.get(event.id, 0)}
        )
        for event in events
    ]


async def _get_event(db: AsyncSession, event_id: UUID) -> Event:
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("", response_model=List[EventResponse])
async def list_events(
    include_past: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """List events, soonest first"""
    query = select(Event)
    if not include_past:
        query = query.where(Event.date >= datetime.utcnow())

    result = await db.execute(query.order_by(Event.date))
    return await to_responses(db, result.scalars().all())


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific event"""
    event = await _get_event(db, event_id)
    return (await to_responses(db, [event]))[0]


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    event_data: EventCreate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create a new event"""
    event = Event(**event_data.model_dump())
    db.add(event)
    await db.commit()
    await db.refresh(event)

    logger.info("Event created", event_id=str(event.id), name=event.name)
    return (await to_responses(db, [event]))[0]


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    event_data: EventUpdate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update an event"""
    event = await _get_event(db, event_id)

    for field, value in event_data.model_dump(exclude_unset=True).items():
        setattr(event, field, value)

    await db.commit()
    await db.refresh(event)

    return (await to_responses(db, [event]))[0]


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: UUID,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Delete an event and its registrations"""
    event = await _get_event(db, event_id)

    result = await db.execute(
        select(EventRegistration).where(EventRegistration.event_id == event.id)
    )
    for registration in result.scalars().all():
        await db.delete(registration)

    await db.delete(event)
    await db.commit()

    logger.info("Event deleted", event_id=str(event_id))


@router.post("/{event_id}/register", response_model=EventRegistrationResponse, status_code=201)
async def register_for_event(
    event_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Register the current user for an event"""
    event = await _get_event(db, event_id)

    result = await db.execute(
        select(EventRegistration.id).where(
            EventRegistration.event_id == event.id,
            EventRegistration.user_id == current_user.id,
        )
    )
    if result.first():
        raise HTTPException(status_code=400, detail="Already registered for this event")

    if event.capacity > 0:
        counts = await registration_counts(db, [event.id])
        if counts.get(event.id, 0) >= event.capacity:
            raise HTTPException(status_code=409, detail="Event is full")

    registration = EventRegistration(event_id=event.id, user_id=current_user.id)
    db.add(registration)
    await db.commit()
    await db.refresh(registration)

    logger.info("Event registration", event_id=str(event.id), user_id=str(current_user.id))
    return registration


@router.delete("/{event_id}/register", status_code=204)
async def unregister_from_event(
    event_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw the current user's registration"""
    result = await db.execute(
        select(EventRegistration).where(
            EventRegistration.event_id == event_id,
            EventRegistration.user_id == current_user.id,
        )
    )
    registration = result.scalar_one_or_none()

    if not registration:
        raise HTTPException(status_code=404, detail="Registration not found")

    await db.delete(registration)
    await db.commit()
