"""Audit log model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Uuid

from hotel_api.database import Base


class AuditLog(Base):
    """Audit trail for privileged actions"""
    __tablename__ = "audit_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Actor information
    actor_id = Column(Uuid)  # User ID or null for system
    actor_email = Column(String(255))

    # Action details
    action = Column(String(100), nullable=False)  # assign_role, etc.
    resource_type = Column(String(50))  # user_role, room, etc.
    resource_id = Column(Uuid)

    # Change data
    data_json = Column(JSON)  # {"before": ..., "after": ...}

    created_at = Column(DateTime, default=datetime.utcnow)
