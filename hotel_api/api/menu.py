"""Restaurant menu API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotel_api.database import get_db
from hotel_api.models.menu import MenuItem
from hotel_api.models.user import AppRole, User
from hotel_api.schemas.menu import MenuItemCreate, MenuItemUpdate, MenuItemResponse
from hotel_api.api.auth import require_role

router = APIRouter()
logger = structlog.get_logger()


async def _get_menu_item(db: AsyncSession, item_id: UUID) -> MenuItem:
    result = await db.execute(select(MenuItem).where(MenuItem.id == item_id))
    item = result.scalar_one_or_none()
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.get("", response_model=List[MenuItemResponse])
async def list_menu_items(
    category: Optional[str] = None,
    available: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
):
    """List menu items grouped by category"""
    query = select(MenuItem)

    if category:
        query = query.where(MenuItem.category == category)

    if available is not None:
        query = query.where(MenuItem.available == available)

    query = query.order_by(MenuItem.category, MenuItem.name)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/search", response_model=List[MenuItemResponse])
async def search_menu(
    query: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """Search available menu items by name, description or category"""
    search_term = f"%{query.lower()}%"

    result = await db.execute(
        select(MenuItem)
        .where(
            MenuItem.available == True,
            or_(
                MenuItem.name.ilike(search_term),
                MenuItem.description.ilike(search_term),
                MenuItem.category.ilike(search_term),
            ),
        )
        .order_by(MenuItem.category, MenuItem.name)
        .limit(20)
    )
    return result.scalars().all()


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific menu item"""
    return await _get_menu_item(db, item_id)


@router.post("", response_model=MenuItemResponse, status_code=201)
async def create_menu_item(
    item_data: MenuItemCreate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create a new menu item"""
    item = MenuItem(**item_data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)

    logger.info("Menu item created", item_id=str(item.id), name=item.name)
    return item


@router.put("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: UUID,
    item_data: MenuItemUpdate,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update a menu item"""
    item = await _get_menu_item(db, item_id)

    for field, value in item_data.model_dump(exclude_unset=True).items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)

    return item


@router.delete("/{item_id}", status_code=204)
async def delete_menu_item(
    item_id: UUID,
    current_user: User = Depends(require_role(AppRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a menu item"""
    item = await _get_menu_item(db, item_id)
    await db.delete(item)
    await db.commit()

    logger.info("Menu item deleted", item_id=str(item_id))
