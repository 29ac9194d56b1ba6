"""Promotion and hotel service API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.clock import utc_today
from hotel_api.database import get_db
from hotel_api.models.offer import Promotion, Service
from hotel_api.models.user import AppRole, User
from hotel_api.schemas.offer import (
    PromotionCreate,
    PromotionUpdate,
    PromotionResponse,
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
)
from hotel_api.api.auth import get_optional_user, get_user_role, require_role

promotions_router = APIRouter()
services_router = APIRouter()
logger = structlog.get_logger()


async def _get_promotion(db: AsyncSession, promotion_id: UUID) -> Promotion:
    result = await db.execute(select(Promotion).where(Promotion.id == promotion_id))
    promotion = result.scalar_one_or_none()
    if not promotion:
        raise HTTPException(status_code=404, detail="Promotion not found")
    return promotion


async def _get_service(db: AsyncSession, service_id: UUID) -> Service:
    result = await db.execute(select(Service).where(Service.id == service_id))
    service = result.scalar_one_or_none()
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@promotions_router.get("", response_model=List[PromotionResponse])
async def list_promotions(
    include_all: bool = Query(False, alias="all"),
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Promotions running today; admins may ask for all of them"""
    query = select(Promotion)

    show_all = False
    if include_all and current_user is not None:
        show_all = await get_user_role(db, current_user.id) == AppRole.ADMIN

    if not show_all:
        today = utc_today()
        query = query.where(
            Promotion.active == True,
            Promotion.start_date <= today,
            Promotion.end_date >= today,
        )

    result = await db.execute(query.order_by(Promotion.start_date, Promotion.name))
    return result.scalars().all()


@promotions_router.post("", response_model=PromotionResponse, status_code=201)
async def create_promotion(
    promotion_data: PromotionCreate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create a promotion"""
    promotion = Promotion(**promotion_data.model_dump())
    db.add(promotion)
    await db.commit()
    await db.refresh(promotion)

    logger.info("Promotion created", promotion_id=str(promotion.id), name=promotion.name)
    return promotion


@promotions_router.put("/{promotion_id}", response_model=PromotionResponse)
async def update_promotion(
    promotion_id: UUID,
    promotion_data: PromotionUpdate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update a promotion"""
    promotion = await _get_promotion(db, promotion_id)
    updates = promotion_data.model_dump(exclude_unset=True)

    start_date = updates.get("start_date", promotion.start_date)
    end_date = updates.get("end_date", promotion.end_date)
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    for field, value in updates.items():
        setattr(promotion, field, value)

    await db.commit()
    await db.refresh(promotion)

    return promotion


@promotions_router.delete("/{promotion_id}", status_code=204)
async def delete_promotion(
    promotion_id: UUID,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a promotion"""
    promotion = await _get_promotion(db, promotion_id)
    await db.delete(promotion)
    await db.commit()


@services_router.get("", response_model=List[ServiceResponse])
async def list_services(
    category: Optional[str] = None,
    include_unavailable: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """List hotel services by category"""
    query = select(Service)

    if category:
        query = query.where(Service.category == category)

    if not include_unavailable:
        query = query.where(Service.available == True)

    result = await db.execute(query.order_by(Service.category, Service.name))
    return result.scalars().all()


@services_router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    service_data: ServiceCreate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create a hotel service"""
    service = Service(**service_data.model_dump())
    db.add(service)
    await db.commit()
    await db.refresh(service)

    logger.info("Service created", service_id=str(service.id), name=service.name)
    return service


@services_router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: UUID,
    service_data: ServiceUpdate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update a hotel service"""
    service = await _get_service(db, service_id)

    for field, value in service_data.model_dump(exclude_unset=True).items():
        setattr(service, field, value)

    await db.commit()
    await db.refresh(service)

    return service


@services_router.delete("/{service_id}", status_code=204)
async def delete_service(
    service_id: UUID,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a hotel service"""
    service = await _get_service(db, service_id)
    await db.delete(service)
    await db.commit()
