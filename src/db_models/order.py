"""Models for items and orders"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_models.base_uuid_model import BaseUUIDModel, utcnow
from db_models.customer import Address, Customer
from db_models.enums import OrderStatusEnum

CENT = Decimal("0.01")


class Item(BaseUUIDModel):
    """Products that can be ordered."""

    __tablename__ = "item"
    table_args = (CheckConstraint("unit_price >= 0", name="ck_item_unit_price"),)

    sku: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Order(BaseUUIDModel):
    """Orders placed by customers."""

    __tablename__ = "order"
    table_args = (Index("ix_order_customer_id", "customer_id"),)

    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("customer.id", ondelete="CASCADE"), nullable=False
    )
    shipping_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("address.id", ondelete="SET NULL")
    )
    status: Mapped[OrderStatusEnum] = mapped_column(
        Enum(OrderStatusEnum, name="order_status"),
        default=OrderStatusEnum.pending,
        nullable=False,
    )
    placed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    customer: Mapped[Customer] = relationship(back_populates="orders")
    shipping_address: Mapped[Address | None] = relationship()
    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
    )

    @property
    def total(self) -> Decimal:
        """Sum of the line subtotals. `lines` must already be loaded."""
        total = sum((line.subtotal for line in self.lines), Decimal("0"))
        return total.quantize(CENT)


class OrderLine(BaseUUIDModel):
    """One item of an order, with the price it was sold at."""

    __tablename__ = "order_line"
    table_args = (
        UniqueConstraint("order_id", "item_id", name="uq_order_line_order_item"),
        CheckConstraint("quantity > 0", name="ck_order_line_quantity"),
    )

    order_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("order.id", ondelete="CASCADE"), nullable=False
    )
    item_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("item.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Price of the item when the order was placed",
    )

    order: Mapped[Order] = relationship(back_populates="lines")
    item: Mapped[Item] = relationship(lazy="joined")

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_price)
