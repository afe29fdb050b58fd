"""Endpoints for the item catalogue"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.session import get_db
from shop_api.schemas.item import ItemCreate, ItemRead
from shop_api.services import item as item_service

router = APIRouter()


@router.post("", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(payload: ItemCreate, db: AsyncSession = Depends(get_db)) -> ItemRead:
    item = await item_service.create_item(db, **payload.model_dump())
    await db.commit()
    return ItemRead.model_validate(item)


@router.get("", response_model=list[ItemRead])
async def list_items(
    active_only: bool = True, db: AsyncSession = Depends(get_db)
) -> list[ItemRead]:
    items = await item_service.list_items(db, active_only=active_only)
    return [ItemRead.model_validate(item) for item in items]
