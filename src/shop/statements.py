"""
Select statements shared by the sync services and the async API.

Relationships needed by the callers are loaded eagerly here: the async
session cannot lazy load, and the sync services should not issue one query
per order line either.
"""

import uuid
from collections.abc import Iterable

from sqlalchemy import Select, func, select
from sqlalchemy.orm import joinedload, selectinload

from db_models import Customer, Item, Order, OrderLine, OrderStatusEnum


def customer_by_id(customer_id: uuid.UUID, with_addresses: bool = False) -> Select:
    stmt = select(Customer).where(Customer.id == customer_id)
    if with_addresses:
        stmt = stmt.options(selectinload(Customer.addresses))
    return stmt


def customer_by_email(email: str) -> Select:
    return select(Customer).where(Customer.email == normalize_email(email))


def customer_with_dependents(customer_id: uuid.UUID) -> Select:
    """Customer with everything a delete cascades to."""
    return (
        select(Customer)
        .where(Customer.id == customer_id)
        .options(
            selectinload(Customer.addresses),
            selectinload(Customer.orders).selectinload(Order.lines),
        )
    )


def customers_page(offset: int = 0, limit: int = 50) -> Select:
    return (
        select(Customer)
        .order_by(Customer.created_at, Customer.id)
        .offset(offset)
        .limit(limit)
    )


def count_customers() -> Select:
    return select(func.count()).select_from(Customer)


def order_with_lines(order_id: uuid.UUID) -> Select:
    return (
        select(Order)
        .where(Order.id == order_id)
        .options(
            selectinload(Order.lines).joinedload(OrderLine.item),
            joinedload(Order.customer),
            joinedload(Order.shipping_address),
        )
    )


def orders_for_customer(
    customer_id: uuid.UUID, status: OrderStatusEnum | None = None
) -> Select:
    stmt = (
        select(Order)
        .where(Order.customer_id == customer_id)
        .options(
            selectinload(Order.lines).joinedload(OrderLine.item),
            joinedload(Order.shipping_address),
        )
        .order_by(Order.placed_at.desc())
    )
    if status is not None:
        stmt = stmt.where(Order.status == status)
    return stmt


def items_by_ids(item_ids: Iterable[uuid.UUID]) -> Select:
    return select(Item).where(Item.id.in_(list(item_ids)))


def item_by_sku(sku: str) -> Select:
    return select(Item).where(Item.sku == sku)


def list_items(active_only: bool = True) -> Select:
    stmt = select(Item).order_by(Item.name)
    if active_only:
        stmt = stmt.where(Item.is_active.is_(True))
    return stmt


def customer_lifetime_value(customer_id: uuid.UUID) -> Select:
    """Sum of line subtotals over the customer's non cancelled orders."""
    return (
        select(
            func.coalesce(func.sum(OrderLine.quantity * OrderLine.unit_price), 0)
        )
        .join(Order, Order.id == OrderLine.order_id)
        .where(
            Order.customer_id == customer_id,
            Order.status != OrderStatusEnum.cancelled,
        )
    )


def normalize_email(email: str) -> str:
    return email.strip().lower()
