"""Admin edge functions: user listing and role assignment"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.database import get_db
from hotel_api.models.audit import AuditLog
from hotel_api.models.user import AppRole, User, Profile, UserRoleAssignment
from hotel_api.api.auth import get_user_for_token, get_user_role

router = APIRouter()
logger = structlog.get_logger()

VALID_ROLES = {role.value for role in AppRole}


class AssignRoleRequest(BaseModel):
    email: Optional[str] = None
    role: Optional[str] = None


class FunctionError(Exception):
    """Failure reported to the caller as an {"error": ...} body"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def require_admin(request: Request, db: AsyncSession) -> User:
    """Authenticate the bearer token and check the caller is an admin"""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise FunctionError(401, "Missing authorization header")

    token = auth_header.replace("Bearer ", "", 1).strip()
    user = await get_user_for_token(db, token)
    if user is None:
        raise FunctionError(401, "Invalid or expired token")

    role = await get_user_role(db, user.id)
    if role != AppRole.ADMIN:
        logger.info("Non-admin called admin function", user_id=str(user.id), role=role.value)
        raise FunctionError(403, "Unauthorized - Admin access required")

    return user


@router.get("/get-users")
async def get_users(request: Request, db: AsyncSession = Depends(get_db)):
    """List every profile with its account email and role"""
    try:
        await require_admin(request, db)

        result = await db.execute(
            select(Profile, User, UserRoleAssignment.role)
            .outerjoin(User, User.id == Profile.user_id)
            .outerjoin(UserRoleAssignment, UserRoleAssignment.user_id == Profile.user_id)
            .order_by(Profile.created_at.desc())
        )

        users = []
        for profile, account, role in result.all():
            users.append({
                "id": str(profile.id),
                "user_id": str(profile.user_id),
                "full_name": profile.full_name,
                "avatar_url": profile.avatar_url,
                "created_at": profile.created_at.isoformat() if profile.created_at else None,
                "email": account.email if account else "Unknown",
                "role": role.value if role else AppRole.GUEST.value,
                "email_confirmed": bool(account and account.email_confirmed_at),
                "last_sign_in": (
                    account.last_sign_in_at.isoformat()
                    if account and account.last_sign_in_at
                    else None
                ),
            })

        return {"users": users}

    except FunctionError as e:
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception("Error in get-users function")
        return error_response(500, str(e) or "Internal server error")


@router.post("/assign-role")
async def assign_role(request: Request, db: AsyncSession = Depends(get_db)):
    """Replace a user's role, looked up by email"""
    try:
        admin = await require_admin(request, db)

        try:
            body = AssignRoleRequest.model_validate(await request.json())
        except ValueError:
            raise FunctionError(400, "Email and role are required")

        if not body.email or not body.role:
            raise FunctionError(400, "Email and role are required")

        if body.role not in VALID_ROLES:
            raise FunctionError(400, "Invalid role")

        email = body.email.strip().lower()
        new_role = AppRole(body.role)

        result = await db.execute(select(User).where(User.email == email))
        target = result.scalar_one_or_none()
        if target is None:
            raise FunctionError(404, "User not found with this email")

        result = await db.execute(select(Profile.id).where(Profile.user_id == target.id))
        if result.scalar_one_or_none() is None:
            raise FunctionError(404, "User profile not found")

        # An admin may not demote themself while they are the only admin
        if target.id == admin.id and new_role != AppRole.ADMIN:
            result = await db.execute(
                select(func.count(UserRoleAssignment.id))
                .where(UserRoleAssignment.role == AppRole.ADMIN)
            )
            if result.scalar() <= 1:
                raise FunctionError(400, "Cannot demote the last admin")

        result = await db.execute(
            select(UserRoleAssignment).where(UserRoleAssignment.user_id == target.id)
        )
        assignment = result.scalar_one_or_none()
        previous_role = assignment.role.value if assignment else None

        if assignment is None:
            db.add(UserRoleAssignment(user_id=target.id, role=new_role))
        else:
            assignment.role = new_role

        db.add(AuditLog(
            actor_id=admin.id,
            actor_email=admin.email,
            action="assign_role",
            resource_type="user_role",
            resource_id=target.id,
            data_json={"before": previous_role, "after": new_role.value},
        ))
        await db.commit()

        logger.info(
            "Role assigned",
            actor_id=str(admin.id),
            user_id=str(target.id),
            role=new_role.value,
            previous_role=previous_role,
        )

        return {
            "success": True,
            "message": f"Role {new_role.value} assigned to {body.email}",
            "user_id": str(target.id),
        }

    except FunctionError as e:
        return error_response(e.status_code, e.message)
    except Exception as e:
        await db.rollback()
        logger.exception("Error in assign-role function")
        return error_response(500, str(e) or "Internal server error")
