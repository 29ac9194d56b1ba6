"""Authentication and session schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from hotel_api.models.user import AppRole


class Token(BaseModel):
    """JWT token response"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class SignupRequest(BaseModel):
    """Sign-up request"""
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str


class RefreshRequest(BaseModel):
    """Token refresh request"""
    refresh_token: str


class UserResponse(BaseModel):
    """Authenticated account"""
    id: UUID
    email: str
    is_active: bool
    email_confirmed_at: Optional[datetime]
    last_sign_in_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    """User profile"""
    id: UUID
    user_id: UUID
    full_name: Optional[str]
    phone: Optional[str]
    avatar_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Profile update request"""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class SessionResponse(BaseModel):
    """Bootstrapped session: account, profile and role"""
    user: UserResponse
    profile: Optional[ProfileResponse]
    role: AppRole
    role_status: str  # resolved, defaulted, timed_out
    is_admin: bool
    is_staff: bool
    is_guest: bool
