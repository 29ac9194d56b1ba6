"""Promotion and service schemas"""

import datetime as dt
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, model_validator

from hotel_api.schemas.common import UpdateModel


class PromotionCreate(BaseModel):
    """Create promotion request"""
    name: str
    description: Optional[str] = None
    discount_percent: int = Field(0, ge=0, le=100)
    start_date: dt.date
    end_date: dt.date
    applicable_room_types: List[str] = []
    applicable_services: List[str] = []
    active: bool = True

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PromotionUpdate(UpdateModel):
    """Update promotion request"""
    non_nullable = (
        "name", "discount_percent", "start_date", "end_date",
        "applicable_room_types", "applicable_services", "active",
    )

    name: Optional[str] = None
    description: Optional[str] = None
    discount_percent: Optional[int] = Field(None, ge=0, le=100)
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    applicable_room_types: Optional[List[str]] = None
    applicable_services: Optional[List[str]] = None
    active: Optional[bool] = None


class PromotionResponse(BaseModel):
    """Promotion response"""
    id: UUID
    name: str
    description: Optional[str]
    discount_percent: int
    start_date: dt.date
    end_date: dt.date
    applicable_room_types: List[str]
    applicable_services: List[str]
    active: bool
    created_at: dt.datetime

    class Config:
        from_attributes = True


class ServiceCreate(BaseModel):
    """Create hotel service request"""
    name: str
    description: Optional[str] = None
    price_cents: int = Field(..., ge=0)
    category: str
    available: bool = True


class ServiceUpdate(UpdateModel):
    """Update hotel service request"""
    non_nullable = ("name", "price_cents", "category", "available")

    name: Optional[str] = None
    description: Optional[str] = None
    price_cents: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    available: Optional[bool] = None


class ServiceResponse(BaseModel):
    """Hotel service response"""
    id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    category: str
    available: bool
    created_at: dt.datetime

    class Config:
        from_attributes = True
