"""Synchronous services for customers and their addresses"""

import logging
import uuid

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db_models import Address, Customer
from shop import statements
from shop.errors import DuplicateEmailError, NotFoundError

logger = logging.getLogger(__name__)


def create_customer(session: Session, name: str, email: str) -> Customer:
    email = statements.normalize_email(email)
    if session.scalar(statements.customer_by_email(email)) is not None:
        raise DuplicateEmailError(email)

    customer = Customer(name=name.strip(), email=email)
    session.add(customer)
    try:
        session.flush()
    except IntegrityError as e:
        raise DuplicateEmailError(email) from e
    logger.info(f"Created customer {customer.id} ({email})")
    return customer


def get_customer(
    session: Session, customer_id: uuid.UUID, with_addresses: bool = False
) -> Customer:
    customer = session.scalar(
        statements.customer_by_id(customer_id, with_addresses=with_addresses)
    )
    if customer is None:
        raise NotFoundError("Customer", customer_id)
    return customer


def find_customer_by_email(session: Session, email: str) -> Customer | None:
    return session.scalar(statements.customer_by_email(email))


def list_customers(session: Session, offset: int = 0, limit: int = 50) -> list[Customer]:
    return list(session.scalars(statements.customers_page(offset, limit)))


def delete_customer(session: Session, customer_id: uuid.UUID) -> None:
    customer = session.scalar(statements.customer_with_dependents(customer_id))
    if customer is None:
        raise NotFoundError("Customer", customer_id)
    session.delete(customer)
    session.flush()
    logger.info(f"Deleted customer {customer_id}")


def add_address(
    session: Session,
    customer_id: uuid.UUID,
    street: str,
    city: str,
    postal_code: str,
    country: str,
    is_default: bool = False,
) -> Address:
    """
    Add an address to a customer.

    The first address of a customer is always its default one. Making a new
    address the default clears the flag on the others.
    """
    customer = get_customer(session, customer_id, with_addresses=True)
    if not customer.addresses:
        is_default = True
    if is_default:
        session.execute(
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
    session.flush()
    return address


def default_address(customer: Customer) -> Address | None:
    return next((a for a in customer.addresses if a.is_default), None)
