"""Models for customer-related tables"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_models.base_uuid_model import BaseUUIDModel


class Customer(BaseUUIDModel):
    """People who place orders in the shop."""

    __tablename__ = "customer"
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    addresses: Mapped[list["Address"]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Address.created_at",
    )
    orders: Mapped[list["Order"]] = relationship(  # noqa: F821
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Order.placed_at.desc()",
    )

    def __repr__(self) -> str:
        return f"Customer(id={self.id!s}, email={self.email!r})"


class Address(BaseUUIDModel):
    """Postal addresses a customer can ship orders to."""

    __tablename__ = "address"
    table_args = (Index("ix_address_customer_id", "customer_id"),)

    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("customer.id", ondelete="CASCADE"), nullable=False
    )
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(
        String(2), nullable=False, comment="ISO 3166-1 alpha-2 country code"
    )
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    customer: Mapped[Customer] = relationship(back_populates="addresses")
