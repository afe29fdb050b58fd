"""Schemas for orders"""

from datetime import datetime
from decimal import Decimal

from pydantic import UUID4, BaseModel, ConfigDict, Field

from db_models.enums import OrderStatusEnum
from shop_api.schemas.customer import AddressRead
from shop_api.schemas.item import ItemRead


class OrderLineCreate(BaseModel):
    item_id: UUID4
    quantity: int = Field(..., description="Number of units, must be positive")


class OrderCreate(BaseModel):
    customer_id: UUID4
    lines: list[OrderLineCreate]
    shipping_address_id: UUID4 | None = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatusEnum


class OrderLineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item: ItemRead
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    customer_id: UUID4
    status: OrderStatusEnum
    placed_at: datetime
    shipping_address: AddressRead | None = None
    lines: list[OrderLineRead]
    total: Decimal
