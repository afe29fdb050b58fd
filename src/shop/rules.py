"""Business rules shared by the sync services and the async API."""

import uuid
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation

from db_models import Address, Item, OrderStatusEnum
from shop.errors import (
    InvalidItemError,
    InvalidOrderError,
    InvalidStatusTransition,
    NotFoundError,
)

ALLOWED_TRANSITIONS: dict[OrderStatusEnum, frozenset[OrderStatusEnum]] = {
    OrderStatusEnum.pending: frozenset(
        {OrderStatusEnum.paid, OrderStatusEnum.cancelled}
    ),
    OrderStatusEnum.paid: frozenset(
        {OrderStatusEnum.shipped, OrderStatusEnum.cancelled}
    ),
    OrderStatusEnum.shipped: frozenset(),
    OrderStatusEnum.cancelled: frozenset(),
}


def _as_pair(line) -> tuple[uuid.UUID, int]:
    try:
        if isinstance(line, tuple | list):
            item_id, quantity = line
        else:
            item_id, quantity = line.item_id, line.quantity
    except (ValueError, AttributeError) as e:
        raise InvalidOrderError(f"Malformed order line: {line!r}") from e
    if not isinstance(item_id, uuid.UUID):
        try:
            item_id = uuid.UUID(str(item_id))
        except ValueError as e:
            raise InvalidOrderError(f"Invalid item id: {item_id!r}") from e
    return item_id, quantity


def validate_order_lines(lines: Iterable) -> dict[uuid.UUID, int]:
    """
    Validate requested order lines and merge duplicated items.

    `lines` holds `(item_id, quantity)` pairs or objects exposing
    `item_id` and `quantity`. Returns `{item_id: total quantity}`.
    """
    merged: dict[uuid.UUID, int] = {}
    for line in lines:
        item_id, quantity = _as_pair(line)
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise InvalidOrderError(f"Quantity for item {item_id} must be an integer")
        if quantity <= 0:
            raise InvalidOrderError(
                f"Quantity for item {item_id} must be positive, got {quantity}"
            )
        merged[item_id] = merged.get(item_id, 0) + quantity
    if not merged:
        raise InvalidOrderError("An order needs at least one line")
    return merged


def check_items_orderable(
    requested: Mapping[uuid.UUID, int], items: Iterable[Item]
) -> dict[uuid.UUID, Item]:
    by_id = {item.id: item for item in items}
    missing = [str(item_id) for item_id in requested if item_id not in by_id]
    if missing:
        raise InvalidOrderError(f"Unknown items: {', '.join(sorted(missing))}")
    inactive = [item.sku for item in by_id.values() if not item.is_active]
    if inactive:
        raise InvalidOrderError(f"Inactive items: {', '.join(sorted(inactive))}")
    return by_id


def check_shipping_address(
    customer_id: uuid.UUID, address: Address | None, address_id: uuid.UUID
) -> Address:
    if address is None:
        raise NotFoundError("Address", address_id)
    if address.customer_id != customer_id:
        raise InvalidOrderError(
            f"Address {address_id} does not belong to customer {customer_id}"
        )
    return address


def check_unit_price(unit_price) -> Decimal:
    try:
        price = Decimal(str(unit_price))
    except InvalidOperation as e:
        raise InvalidItemError(f"unit_price is not a number: {unit_price!r}") from e
    if not price.is_finite():
        raise InvalidItemError(f"unit_price must be finite, got {price}")
    if price < 0:
        raise InvalidItemError(f"unit_price must be positive or zero, got {price}")
    return price


def check_transition(current: OrderStatusEnum, target: OrderStatusEnum) -> None:
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransition(current, target)
