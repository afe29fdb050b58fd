"""Async services for customers and their addresses"""

import logging
import uuid
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Address, Customer
from shop import statements
from shop.errors import DuplicateEmailError, NotFoundError
from shop_api.services.errors import translate_shop_errors

logger = logging.getLogger(__name__)


async def _get_customer(
    db: AsyncSession, customer_id: uuid.UUID, with_addresses: bool = False
) -> Customer:
    customer = await db.scalar(
        statements.customer_by_id(customer_id, with_addresses=with_addresses)
    )
    if customer is None:
        raise NotFoundError("Customer", customer_id)
    return customer


@translate_shop_errors
async def create_customer(db: AsyncSession, name: str, email: str) -> Customer:
    email = statements.normalize_email(email)
    if await db.scalar(statements.customer_by_email(email)) is not None:
        raise DuplicateEmailError(email)

    customer = Customer(name=name.strip(), email=email)
    db.add(customer)
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateEmailError(email) from e
    logger.info(f"Created customer {customer.id} ({email})")
    return customer


@translate_shop_errors
async def get_customer(
    db: AsyncSession, customer_id: uuid.UUID, with_addresses: bool = False
) -> Customer:
    return await _get_customer(db, customer_id, with_addresses)


@translate_shop_errors
async def delete_customer(db: AsyncSession, customer_id: uuid.UUID) -> None:
    customer = await db.scalar(statements.customer_with_dependents(customer_id))
    if customer is None:
        raise NotFoundError("Customer", customer_id)
    await db.delete(customer)
    await db.flush()
    logger.info(f"Deleted customer {customer_id}")


@translate_shop_errors
async def add_address(
    db: AsyncSession,
    customer_id: uuid.UUID,
    street: str,
    city: str,
    postal_code: str,
    country: str,
    is_default: bool = False,
) -> Address:
    customer = await _get_customer(db, customer_id, with_addresses=True)
    if not customer.addresses:
        is_default = True
    if is_default:
        await db.execute(
            update(Address)
            .where(Address.customer_id == customer_id)
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )

    address = Address(
        customer_id=customer_id,
        street=street,
        city=city,
        postal_code=postal_code,
        country=country.upper(),
        is_default=is_default,
    )
    customer.addresses.append(address)
    await db.flush()
    return address


@translate_shop_errors
async def customer_lifetime_value(db: AsyncSession, customer_id: uuid.UUID) -> Decimal:
    await _get_customer(db, customer_id)
    value = await db.scalar(statements.customer_lifetime_value(customer_id))
    return Decimal(str(value)).quantize(Decimal("0.01"))


async def list_customers(
    db: AsyncSession, offset: int = 0, limit: int = 50
) -> tuple[list[Customer], int]:
    """One page of customers and the total number of customers."""
    total = await db.scalar(statements.count_customers())
    result = await db.scalars(statements.customers_page(offset, limit))
    return list(result), total
