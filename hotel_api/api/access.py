"""Route guard API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api import access
from hotel_api.database import get_db
from hotel_api.models.user import AppRole, User
from hotel_api.api.auth import (
    ROLE_TIMED_OUT,
    get_current_active_user,
    get_optional_user,
    get_user_role,
    resolve_session_role,
)

router = APIRouter()


class AccessCheckResponse(BaseModel):
    path: str
    action: str
    redirect_to: Optional[str] = None
    required_role: Optional[AppRole] = None
    role: Optional[AppRole] = None


class NavigationEntry(BaseModel):
    path: str
    name: str


@router.get("/check", response_model=AccessCheckResponse)
async def check_access(
    path: str = Query(..., min_length=1),
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Decide whether a portal page renders, redirects or needs sign-in"""
    role = None
    role_timed_out = False

    if current_user is not None:
        role, role_status = await resolve_session_role(db, current_user.id)
        role_timed_out = role_status == ROLE_TIMED_OUT

    decision = access.decide(
        path,
        authenticated=current_user is not None,
        role=role,
        role_timed_out=role_timed_out,
    )

    return AccessCheckResponse(
        path=decision.path,
        action=decision.action,
        redirect_to=decision.redirect_to,
        required_role=decision.required_role,
        role=role,
    )


@router.get("/routes", response_model=List[NavigationEntry])
async def list_routes(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Navigation entries available to the current user's role"""
    role = await get_user_role(db, current_user.id)
    return [
        NavigationEntry(path=route.path, name=route.name)
        for route in access.navigation_for(role)
    ]
