"""Schemas for catalogue items"""

from decimal import Decimal

from pydantic import UUID4, BaseModel, ConfigDict, Field


class ItemCreate(BaseModel):
    sku: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    unit_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    description: str | None = None


class ItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    sku: str
    name: str
    description: str | None = None
    unit_price: Decimal
    is_active: bool
