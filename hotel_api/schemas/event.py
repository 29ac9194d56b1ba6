"""Event schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from hotel_api.schemas.common import UpdateModel


class EventCreate(BaseModel):
    """Create event request"""
    name: str
    description: Optional[str] = None
    date: datetime
    price_cents: int = Field(0, ge=0)
    capacity: int = Field(0, ge=0)
    image_url: Optional[str] = None


class EventUpdate(UpdateModel):
    """Update event request"""
    non_nullable = ("name", "date", "price_cents", "capacity")

    name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    price_cents: Optional[int] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None


class EventResponse(BaseModel):
    """Event response"""
    id: UUID
    name: str
    description: Optional[str]
    date: datetime
    price_cents: int
    capacity: int
    image_url: Optional[str]
    registered_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventRegistrationResponse(BaseModel):
    """Event registration response"""
    id: UUID
    event_id: UUID
    user_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
