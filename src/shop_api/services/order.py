"""Async services for orders"""

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Address, Order, OrderLine, OrderStatusEnum
from shop import statements
from shop.errors import NotFoundError
from shop.rules import (
    check_items_orderable,
    check_shipping_address,
    check_transition,
    validate_order_lines,
)
from shop_api.services.customer import _get_customer
from shop_api.services.errors import translate_shop_errors

logger = logging.getLogger(__name__)


async def _get_order(db: AsyncSession, order_id: uuid.UUID) -> Order:
    order = await db.scalar(
        statements.order_with_lines(order_id).execution_options(populate_existing=True)
    )
    if order is None:
        raise NotFoundError("Order", order_id)
    return order


@translate_shop_errors
async def place_order(
    db: AsyncSession,
    customer_id: uuid.UUID,
    lines: Iterable,
    shipping_address_id: uuid.UUID | None = None,
) -> Order:
    """Same rules as `shop.orders.place_order`, on an async session."""
    requested = validate_order_lines(lines)
    customer = await _get_customer(db, customer_id, with_addresses=True)
    items = check_items_orderable(
        requested, await db.scalars(statements.items_by_ids(requested))
    )

    if shipping_address_id is not None:
        address = check_shipping_address(
            customer_id,
            await db.get(Address, shipping_address_id),
            shipping_address_id,
        )
    else:
        address = next((a for a in customer.addresses if a.is_default), None)

    order = Order(
        customer_id=customer.id,
        shipping_address_id=address.id if address is not None else None,
        status=OrderStatusEnum.pending,
        lines=[
            OrderLine(
                item_id=item_id,
                quantity=quantity,
                unit_price=items[item_id].unit_price,
            )
            for item_id, quantity in requested.items()
        ],
    )
    db.add(order)
    await db.flush()
    logger.info(f"Placed order {order.id} for customer {customer_id}")
    return await _get_order(db, order.id)


@translate_shop_errors
async def get_order(db: AsyncSession, order_id: uuid.UUID) -> Order:
    return await _get_order(db, order_id)


@translate_shop_errors
async def list_orders(
    db: AsyncSession,
    customer_id: uuid.UUID,
    status: OrderStatusEnum | None = None,
) -> list[Order]:
    await _get_customer(db, customer_id)
    result = await db.scalars(statements.orders_for_customer(customer_id, status))
    return list(result)


@translate_shop_errors
async def update_order_status(
    db: AsyncSession, order_id: uuid.UUID, status: OrderStatusEnum
) -> Order:
    order = await _get_order(db, order_id)
    check_transition(order.status, status)
    logger.info(f"Order {order_id}: {order.status.value} -> {status.value}")
    order.status = status
    await db.flush()
    return order
