"""Synchronous services for the item catalogue"""

import logging
import uuid
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db_models import Item
from shop import statements
from shop.errors import DuplicateSkuError, NotFoundError
from shop.rules import check_unit_price

logger = logging.getLogger(__name__)


def create_item(
    session: Session,
    sku: str,
    name: str,
    unit_price: Decimal | float | str,
    description: str | None = None,
) -> Item:
    price = check_unit_price(unit_price)
    if session.scalar(statements.item_by_sku(sku)) is not None:
        raise DuplicateSkuError(sku)

    item = Item(sku=sku, name=name, unit_price=price, description=description)
    session.add(item)
    try:
        session.flush()
    except IntegrityError as e:
        raise DuplicateSkuError(sku) from e
    logger.info(f"Created item {sku} at {price}")
    return item


def get_item(session: Session, item_id: uuid.UUID) -> Item:
    item = session.get(Item, item_id)
    if item is None:
        raise NotFoundError("Item", item_id)
    return item


def list_items(session: Session, active_only: bool = True) -> list[Item]:
    return list(session.scalars(statements.list_items(active_only)))


def deactivate_item(session: Session, item_id: uuid.UUID) -> Item:
    item = get_item(session, item_id)
    item.is_active = False
    session.flush()
    return item
