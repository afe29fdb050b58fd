"""Endpoints for orders"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.session import get_db
from shop_api.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate
from shop_api.services import order as order_service

router = APIRouter()


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: OrderCreate, db: AsyncSession = Depends(get_db)
) -> OrderRead:
    order = await order_service.place_order(
        db, payload.customer_id, payload.lines, payload.shipping_address_id
    )
    await db.commit()
    return OrderRead.model_validate(order)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> OrderRead:
    order = await order_service.get_order(db, order_id)
    return OrderRead.model_validate(order)


@router.patch("/{order_id}/status", response_model=OrderRead)
async def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> OrderRead:
    order = await order_service.update_order_status(db, order_id, payload.status)
    await db.commit()
    return OrderRead.model_validate(order)
