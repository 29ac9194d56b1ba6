"""Authentication API endpoints and session bootstrap"""

import asyncio
from datetime import datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.config import settings
from hotel_api.database import get_db
from hotel_api.models.user import AppRole, User, Profile, UserRoleAssignment
from hotel_api.schemas.auth import (
    Token,
    SignupRequest,
    RefreshRequest,
    UserResponse,
    ProfileResponse,
    ProfileUpdate,
    SessionResponse,
)

router = APIRouter()
logger = structlog.get_logger()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

# Outcomes of the session role lookup
ROLE_RESOLVED = "resolved"
ROLE_DEFAULTED = "defaulted"
ROLE_TIMED_OUT = "timed_out"

# Roles that run the front desk and restaurant
BACK_OFFICE_ROLES = (AppRole.ADMIN, AppRole.STAFF)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def create_access_token(user: User) -> str:
    """Create JWT access token"""
    expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_refresh_token(user: User) -> str:
    """Create JWT refresh token"""
    expire = datetime.utcnow() + timedelta(days=settings.refresh_token_expire_days)
    payload = {
        "sub": str(user.id),
        "exp": expire,
        "type": "refresh",
        "jti": uuid4().hex,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, expected_type: str = "access") -> Optional[UUID]:
    """Return the user id carried by a valid token, or None"""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None or payload.get("type") != expected_type:
        return None

    try:
        return UUID(user_id)
    except ValueError:
        return None


async def get_user_for_token(db: AsyncSession, token: str) -> Optional[User]:
    """Load the active user an access token belongs to"""
    user_id = decode_token(token)
    if user_id is None:
        return None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        return None
    return user


def _issue_tokens(user: User) -> Token:
    access_token = create_access_token(user)
    refresh_token = create_refresh_token(user)
    user.refresh_token = refresh_token
    return Token(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from token"""
    user = await get_user_for_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Current user when a valid token is sent, None otherwise"""
    if not token:
        return None
    return await get_user_for_token(db, token)


async def fetch_user_role(db: AsyncSession, user_id: UUID) -> Optional[AppRole]:
    """Role row for a user, or None when the user has none"""
    result = await db.execute(
        select(UserRoleAssignment.role).where(UserRoleAssignment.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_user_role(db: AsyncSession, user_id: UUID) -> AppRole:
    """Role used for authorization; users without a role row are guests"""
    role = await fetch_user_role(db, user_id)
    return role or AppRole.GUEST


async def resolve_session_role(db: AsyncSession, user_id: UUID) -> Tuple[AppRole, str]:
    """
    Resolve the role for a session bootstrap.

    Never fails: a missing role row or a database error yields the guest
    role, and a lookup that stalls past the configured timeout yields the
    guest role flagged as timed out so the client can offer a retry.
    """
    try:
        role = await asyncio.wait_for(
            fetch_user_role(db, user_id),
            timeout=settings.role_fetch_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning(
            "Role fetch timed out, defaulting to guest",
            user_id=str(user_id),
            timeout=settings.role_fetch_timeout_seconds,
        )
        return AppRole.GUEST, ROLE_TIMED_OUT
    except SQLAlchemyError as e:
        logger.error("Error fetching role, defaulting to guest", user_id=str(user_id), error=str(e))
        return AppRole.GUEST, ROLE_DEFAULTED

    if role is None:
        logger.warning("No role found for user, defaulting to guest", user_id=str(user_id))
        return AppRole.GUEST, ROLE_DEFAULTED

    return role, ROLE_RESOLVED


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Verify user is active"""
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


async def get_current_role(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
) -> AppRole:
    """Role of the authenticated user"""
    return await get_user_role(db, current_user.id)


def require_role(*roles: AppRole):
    """Dependency factory for role-based access control"""
    async def role_checker(
        current_user: User = Depends(get_current_active_user),
        db: AsyncSession = Depends(get_db),
    ) -> User:
        role = await get_user_role(db, current_user.id)
        if role not in roles:
            logger.info(
                "Access denied",
                user_id=str(current_user.id),
                role=role.value,
                required=[r.value for r in roles],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user
    return role_checker


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Register a new account with a profile and the guest role"""
    email = request.email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        email=email,
        hashed_password=get_password_hash(request.password),
        email_confirmed_at=datetime.utcnow(),
        last_sign_in_at=datetime.utcnow(),
    )
    db.add(user)
    await db.flush()

    db.add(Profile(user_id=user.id, full_name=request.full_name))
    db.add(UserRoleAssignment(user_id=user.id, role=AppRole.GUEST))

    token = _issue_tokens(user)
    await db.commit()

    logger.info("User signed up", user_id=str(user.id))
    return token


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Authenticate user and return tokens"""
    result = await db.execute(select(User).where(User.email == form_data.username.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is disabled",
        )

    user.last_sign_in_at = datetime.utcnow()
    token = _issue_tokens(user)
    await db.commit()

    logger.info("User signed in", user_id=str(user.id))
    return token


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    """Refresh access token using refresh token"""
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid refresh token",
    )

    user_id = decode_token(request.refresh_token, expected_type="refresh")
    if user_id is None:
        raise invalid

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active or user.refresh_token != request.refresh_token:
        raise invalid

    # Rotation: the presented refresh token stops working
    token = _issue_tokens(user)
    await db.commit()

    return token


@router.get("/session", response_model=SessionResponse)
async def get_session(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Bootstrap the client session: account, profile and role"""
    result = await db.execute(select(Profile).where(Profile.user_id == current_user.id))
    profile = result.scalar_one_or_none()
    if profile is None:
        logger.warning("Profile not found for user", user_id=str(current_user.id))

    role, role_status = await resolve_session_role(db, current_user.id)

    return SessionResponse(
        user=UserResponse.model_validate(current_user),
        profile=ProfileResponse.model_validate(profile) if profile else None,
        role=role,
        role_status=role_status,
        is_admin=role == AppRole.ADMIN,
        is_staff=role == AppRole.STAFF,
        is_guest=role == AppRole.GUEST,
    )


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    updates: ProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Update the current user's profile"""
    result = await db.execute(select(Profile).where(Profile.user_id == current_user.id))
    profile = result.scalar_one_or_none()

    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)

    await db.commit()
    await db.refresh(profile)

    return profile


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Logout user by invalidating refresh token"""
    current_user.refresh_token = None
    await db.commit()
    return {"message": "Successfully logged out"}
