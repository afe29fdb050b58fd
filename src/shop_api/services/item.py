"""Async services for the item catalogue"""

import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Item
from shop import statements
from shop.errors import DuplicateSkuError
from shop.rules import check_unit_price
from shop_api.services.errors import translate_shop_errors

logger = logging.getLogger(__name__)


@translate_shop_errors
async def create_item(
    db: AsyncSession,
    sku: str,
    name: str,
    unit_price: Decimal,
    description: str | None = None,
) -> Item:
    price = check_unit_price(unit_price)
    if await db.scalar(statements.item_by_sku(sku)) is not None:
        raise DuplicateSkuError(sku)

    item = Item(sku=sku, name=name, unit_price=price, description=description)
    db.add(item)
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateSkuError(sku) from e
    logger.info(f"Created item {sku} at {price}")
    return item


async def list_items(db: AsyncSession, active_only: bool = True) -> list[Item]:
    result = await db.scalars(statements.list_items(active_only))
    return list(result)
