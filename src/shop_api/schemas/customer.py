"""Schemas for customers and addresses"""

from datetime import datetime
from decimal import Decimal

from pydantic import UUID4, BaseModel, ConfigDict, EmailStr, Field


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class AddressCreate(BaseModel):
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(
        ..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2 country code"
    )
    is_default: bool = False


class AddressRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    street: str
    city: str
    postal_code: str
    country: str
    is_default: bool


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    name: str
    email: str
    created_at: datetime


class CustomerDetail(CustomerRead):
    addresses: list[AddressRead] = Field(default_factory=list)


class LifetimeValue(BaseModel):
    customer_id: UUID4
    lifetime_value: Decimal = Field(
        ..., description="Total of the customer's orders, cancelled orders excluded"
    )
