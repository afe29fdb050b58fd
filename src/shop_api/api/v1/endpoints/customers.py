"""Endpoints for customers and their addresses"""

import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi_pagination import Page, Params, create_page
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.enums import OrderStatusEnum
from db_models.session import get_db
from shop_api.schemas.customer import (
    AddressCreate,
    AddressRead,
    CustomerCreate,
    CustomerDetail,
    CustomerRead,
    LifetimeValue,
)
from shop_api.schemas.order import OrderRead
from shop_api.services import customer as customer_service
from shop_api.services import order as order_service


router = APIRouter()


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate, db: AsyncSession = Depends(get_db)
) -> CustomerRead:
    customer = await customer_service.create_customer(db, payload.name, payload.email)
    await db.commit()
    return CustomerRead.model_validate(customer)


@router.get("", response_model=Page[CustomerRead])
async def list_customers(
    params: Params = Depends(), db: AsyncSession = Depends(get_db)
) -> Page[CustomerRead]:
    customers, total = await customer_service.list_customers(
        db, offset=(params.page - 1) * params.size, limit=params.size
    )
    return create_page(
        [CustomerRead.model_validate(c) for c in customers], total=total, params=params
    )


@router.get("/{customer_id}", response_model=CustomerDetail)
async def get_customer(
    customer_id: uuid.UUID, db: AsyncSession = Depends(get_db)
) -> CustomerDetail:
    customer = await customer_service.get_customer(db, customer_id, with_addresses=True)
    return CustomerDetail.model_validate(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: uuid.UUID, db: AsyncSession = Depends(get_db)
) -> Response:
    await customer_service.delete_customer(db, customer_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{customer_id}/addresses",
    response_model=AddressRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_address(
    customer_id: uuid.UUID,
    payload: AddressCreate,
    db: AsyncSession = Depends(get_db),
) -> AddressRead:
    address = await customer_service.add_address(
        db, customer_id, **payload.model_dump()
    )
    await db.commit()
    return AddressRead.model_validate(address)


@router.get("/{customer_id}/orders", response_model=list[OrderRead])
async def list_customer_orders(
    customer_id: uuid.UUID,
    order_status: OrderStatusEnum | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> list[OrderRead]:
    orders = await order_service.list_orders(db, customer_id, order_status)
    return [OrderRead.model_validate(order) for order in orders]


@router.get("/{customer_id}/lifetime-value", response_model=LifetimeValue)
async def get_lifetime_value(
    customer_id: uuid.UUID, db: AsyncSession = Depends(get_db)
) -> LifetimeValue:
    value = await customer_service.customer_lifetime_value(db, customer_id)
    return LifetimeValue(customer_id=customer_id, lifetime_value=float(value))
