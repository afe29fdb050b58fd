"""Synchronous services for orders"""

import logging
import uuid
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy.orm import Session

from db_models import Address, Order, OrderLine, OrderStatusEnum
from shop import statements
from shop.customers import default_address, get_customer
from shop.errors import NotFoundError
from shop.rules import (
    check_items_orderable,
    check_shipping_address,
    check_transition,
    validate_order_lines,
)

logger = logging.getLogger(__name__)


def place_order(
    session: Session,
    customer_id: uuid.UUID,
    lines: Iterable,
    shipping_address_id: uuid.UUID | None = None,
) -> Order:
    """
    Place a pending order for a customer.

    Each line copies the current price of its item, so later price changes
    do not alter the order. Without an explicit address the customer's
    default address is used.
    """
    requested = validate_order_lines(lines)
    customer = get_customer(session, customer_id, with_addresses=True)
    items = check_items_orderable(
        requested, session.scalars(statements.items_by_ids(requested))
    )

    if shipping_address_id is not None:
        address = check_shipping_address(
            customer_id, session.get(Address, shipping_address_id), shipping_address_id
        )
    else:
        address = default_address(customer)

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
    session.add(order)
    session.flush()
    logger.info(
        f"Placed order {order.id} for customer {customer_id} with {len(order.lines)} lines"
    )
    return get_order(session, order.id)


def get_order(session: Session, order_id: uuid.UUID) -> Order:
    order = session.scalar(
        statements.order_with_lines(order_id).execution_options(populate_existing=True)
    )
    if order is None:
        raise NotFoundError("Order", order_id)
    return order


def list_orders(
    session: Session,
    customer_id: uuid.UUID,
    status: OrderStatusEnum | None = None,
) -> list[Order]:
    get_customer(session, customer_id)
    return list(session.scalars(statements.orders_for_customer(customer_id, status)))


def update_order_status(
    session: Session, order_id: uuid.UUID, status: OrderStatusEnum
) -> Order:
    order = get_order(session, order_id)
    check_transition(order.status, status)
    logger.info(f"Order {order_id}: {order.status.value} -> {status.value}")
    order.status = status
    session.flush()
    return order


def cancel_order(session: Session, order_id: uuid.UUID) -> Order:
    return update_order_status(session, order_id, OrderStatusEnum.cancelled)


def customer_lifetime_value(session: Session, customer_id: uuid.UUID) -> Decimal:
    get_customer(session, customer_id)
    value = session.scalar(statements.customer_lifetime_value(customer_id))
    return Decimal(str(value)).quantize(Decimal("0.01"))
