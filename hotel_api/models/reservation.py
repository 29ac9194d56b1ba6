"""Table reservation model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, Time, DateTime, ForeignKey, Text, Enum, Uuid
import enum

from hotel_api.database import Base
from hotel_api.models.user import enum_values


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class TableReservation(Base):
    """Restaurant table reservations"""
    __tablename__ = "table_reservations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Reservation details
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    guests = Column(Integer, default=2, nullable=False)
    table_number = Column(String(20))

    # Status
    status = Column(
        Enum(ReservationStatus, name="reservation_status", values_callable=enum_values),
        default=ReservationStatus.PENDING,
        nullable=False,
    )

    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
