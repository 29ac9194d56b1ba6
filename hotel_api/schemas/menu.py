"""Menu schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from hotel_api.schemas.common import UpdateModel


class MenuItemCreate(BaseModel):
    """Create menu item request"""
    name: str
    description: Optional[str] = None
    price_cents: int = Field(..., ge=0)
    category: str
    image_url: Optional[str] = None
    available: bool = True


class MenuItemUpdate(UpdateModel):
    """Update menu item request"""
    non_nullable = ("name", "price_cents", "category", "available")

    name: Optional[str] = None
    description: Optional[str] = None
    price_cents: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    available: Optional[bool] = None


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    category: str
    image_url: Optional[str]
    available: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
