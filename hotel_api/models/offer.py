"""Promotion and hotel service models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, JSON, Text, Uuid

from hotel_api.database import Base


class Promotion(Base):
    """Time-boxed discounts on rooms and services"""
    __tablename__ = "promotions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    discount_percent = Column(Integer, default=0, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    applicable_room_types = Column(JSON, default=list)  # ["Deluxe", "Suite"]
    applicable_services = Column(JSON, default=list)  # ["spa", "airport transfer"]
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Service(Base):
    """Bookable hotel services (spa, laundry, transfers, ...)"""
    __tablename__ = "services"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price_cents = Column(Integer, nullable=False)
    category = Column(String(100), nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
