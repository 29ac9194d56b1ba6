"""Restaurant menu model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, Uuid

from hotel_api.database import Base


class MenuItem(Base):
    """Restaurant menu items"""
    __tablename__ = "menu_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price_cents = Column(Integer, nullable=False)  # Price in cents to avoid float issues
    category = Column(String(100), nullable=False)  # Starters, Mains, Desserts, Drinks, etc.
    image_url = Column(String(500))
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
