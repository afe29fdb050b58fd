import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db_models import Address, Customer, Order, OrderLine
from shop import customers, items, orders
from shop.errors import DuplicateEmailError, NotFoundError


class TestCreateCustomer:
    def test_email_is_normalized(self, session: Session):
        customer = customers.create_customer(session, "  Grace Hopper ", " Grace@Example.COM ")

        assert customer.name == "Grace Hopper"
        assert customer.email == "grace@example.com"
        assert customers.find_customer_by_email(session, "GRACE@example.com") is customer

    def test_duplicate_email(self, session: Session):
        customers.create_customer(session, "Grace", "grace@example.com")

        with pytest.raises(DuplicateEmailError):
            customers.create_customer(session, "Other Grace", "GRACE@example.com")


class TestGetAndList:
    def test_get_unknown_customer(self, session: Session):
        with pytest.raises(NotFoundError, match="Customer"):
            customers.get_customer(session, uuid.uuid4())

    def test_list_customers_pages(self, session: Session):
        created = [
            customers.create_customer(session, f"Customer {i}", f"c{i}@example.com")
            for i in range(5)
        ]

        first_page = customers.list_customers(session, offset=0, limit=3)
        second_page = customers.list_customers(session, offset=3, limit=3)

        assert len(first_page) == 3
        assert len(second_page) == 2
        assert {c.id for c in first_page + second_page} == {c.id for c in created}


class TestAddresses:
    def test_first_address_becomes_default(self, session: Session):
        customer = customers.create_customer(session, "Grace", "grace@example.com")

        address = customers.add_address(session, customer.id, "1 Main St", "Paris", "75001", "fr")

        assert address.is_default is True
        assert address.country == "FR"
        assert customers.default_address(customer) is address

    def test_new_default_clears_previous_one(self, session: Session):
        customer = customers.create_customer(session, "Grace", "grace@example.com")
        first = customers.add_address(session, customer.id, "1 Main St", "Paris", "75001", "FR")
        second = customers.add_address(
            session, customer.id, "2 High St", "Lyon", "69001", "FR", is_default=True
        )

        assert first.is_default is False
        assert second.is_default is True
        defaults = session.scalar(
            select(func.count())
            .select_from(Address)
            .where(Address.customer_id == customer.id, Address.is_default.is_(True))
        )
        assert defaults == 1

    def test_non_default_address_keeps_existing_default(self, session: Session):
        customer = customers.create_customer(session, "Grace", "grace@example.com")
        first = customers.add_address(session, customer.id, "1 Main St", "Paris", "75001", "FR")
        second = customers.add_address(session, customer.id, "2 High St", "Lyon", "69001", "FR")

        assert first.is_default is True
        assert second.is_default is False

    def test_address_for_unknown_customer(self, session: Session):
        with pytest.raises(NotFoundError):
            customers.add_address(session, uuid.uuid4(), "1 Main St", "Paris", "75001", "FR")


class TestDeleteCustomer:
    def test_delete_cascades_to_addresses_and_orders(self, session: Session):
        customer = customers.create_customer(session, "Grace", "grace@example.com")
        customers.add_address(session, customer.id, "1 Main St", "Paris", "75001", "FR")
        item = items.create_item(session, "KB-001", "Keyboard", "49.90")
        orders.place_order(session, customer.id, [(item.id, 1)])

        customers.delete_customer(session, customer.id)

        assert session.scalar(select(func.count()).select_from(Customer)) == 0
        assert session.scalar(select(func.count()).select_from(Address)) == 0
        assert session.scalar(select(func.count()).select_from(Order)) == 0
        assert session.scalar(select(func.count()).select_from(OrderLine)) == 0

    def test_delete_unknown_customer(self, session: Session):
        with pytest.raises(NotFoundError):
            customers.delete_customer(session, uuid.uuid4())
