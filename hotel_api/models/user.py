"""User accounts, profiles and role assignments"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum, Uuid
import enum

from hotel_api.database import Base


class AppRole(str, enum.Enum):
    """Roles a user can hold (exactly one per user)"""
    ADMIN = "admin"
    STAFF = "staff"
    GUEST = "guest"


def enum_values(enum_cls):
    """Persist enum values ("admin") rather than member names ("ADMIN")"""
    return [member.value for member in enum_cls]


class User(Base):
    """Authentication accounts"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)
    email_confirmed_at = Column(DateTime)
    last_sign_in_at = Column(DateTime)

    # Tokens
    refresh_token = Column(String(500))

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Profile(Base):
    """Public profile data for a user"""
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    full_name = Column(String(255))
    phone = Column(String(50))
    avatar_url = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class UserRoleAssignment(Base):
    """Role held by a user"""
    __tablename__ = "user_roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    role = Column(
        Enum(AppRole, name="app_role", values_callable=enum_values),
        nullable=False,
        default=AppRole.GUEST,
    )
