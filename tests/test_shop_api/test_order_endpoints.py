"""
Order endpoint tests.
Tests for placing orders, reading them back and moving them through their statuses.
"""

import uuid
from decimal import Decimal

import httpx
import pytest
from fastapi import status

from db_models import Address, Customer, Item
from tests.factories import AddressFactory, CustomerFactory


def order_payload(customer: Customer, *lines: tuple[Item, int], **extra) -> dict:
    return {
        "customer_id": str(customer.id),
        "lines": [{"item_id": str(item.id), "quantity": quantity} for item, quantity in lines],
        **extra,
    }


class TestPlaceOrder:
    @pytest.mark.asyncio
    async def test_place_order(
        self,
        app_client: httpx.AsyncClient,
        foo_customer: Customer,
        foo_address: Address,
        keyboard: Item,
        mouse: Item,
    ):
        response = await app_client.post(
            "/v1/orders", json=order_payload(foo_customer, (keyboard, 1), (mouse, 3))
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "pending"
        assert data["customer_id"] == str(foo_customer.id)
        assert data["shipping_address"]["id"] == str(foo_address.id)
        assert Decimal(data["total"]) == Decimal("109.87")
        lines = {line["item"]["sku"]: line for line in data["lines"]}
        assert lines["MS-001"]["quantity"] == 3
        assert Decimal(lines["MS-001"]["subtotal"]) == Decimal("59.97")

    @pytest.mark.asyncio
    async def test_get_order(
        self, app_client: httpx.AsyncClient, foo_customer: Customer, keyboard: Item
    ):
        created = await app_client.post("/v1/orders", json=order_payload(foo_customer, (keyboard, 1)))

        response = await app_client.get(f"/v1/orders/{created.json()['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == created.json()

    @pytest.mark.asyncio
    async def test_empty_order(self, app_client: httpx.AsyncClient, foo_customer: Customer):
        response = await app_client.post("/v1/orders", json=order_payload(foo_customer))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "at least one line" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_zero_quantity(
        self, app_client: httpx.AsyncClient, foo_customer: Customer, keyboard: Item
    ):
        response = await app_client.post(
            "/v1/orders", json=order_payload(foo_customer, (keyboard, 0))
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_inactive_item(
        self, app_client: httpx.AsyncClient, foo_customer: Customer, retired_item: Item
    ):
        response = await app_client.post(
            "/v1/orders", json=order_payload(foo_customer, (retired_item, 1))
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "OLD-001" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_unknown_customer(self, app_client: httpx.AsyncClient, keyboard: Item):
        response = await app_client.post(
            "/v1/orders",
            json={"customer_id": str(uuid.uuid4()), "lines": [{"item_id": str(keyboard.id), "quantity": 1}]},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_address_of_another_customer(
        self, app_client: httpx.AsyncClient, db_session, foo_customer: Customer, keyboard: Item
    ):
        other = await CustomerFactory.create_async(session=db_session)
        address = await AddressFactory.create_async(session=db_session, customer_id=other.id)

        response = await app_client.post(
            "/v1/orders",
            json=order_payload(
                foo_customer, (keyboard, 1), shipping_address_id=str(address.id)
            ),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_unknown_order(self, app_client: httpx.AsyncClient):
        response = await app_client.get(f"/v1/orders/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestOrderStatus:
    @pytest.mark.asyncio
    async def test_pay_then_ship(
        self, app_client: httpx.AsyncClient, foo_customer: Customer, keyboard: Item
    ):
        order_id = (
            await app_client.post("/v1/orders", json=order_payload(foo_customer, (keyboard, 1)))
        ).json()["id"]

        paid = await app_client.patch(f"/v1/orders/{order_id}/status", json={"status": "paid"})
        shipped = await app_client.patch(
            f"/v1/orders/{order_id}/status", json={"status": "shipped"}
        )

        assert paid.status_code == status.HTTP_200_OK
        assert shipped.json()["status"] == "shipped"

    @pytest.mark.asyncio
    async def test_cannot_ship_unpaid_order(
        self, app_client: httpx.AsyncClient, foo_customer: Customer, keyboard: Item
    ):
        order_id = (
            await app_client.post("/v1/orders", json=order_payload(foo_customer, (keyboard, 1)))
        ).json()["id"]

        response = await app_client.patch(
            f"/v1/orders/{order_id}/status", json={"status": "shipped"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "Cannot move an order" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_unknown_status_value(
        self, app_client: httpx.AsyncClient, foo_customer: Customer, keyboard: Item
    ):
        order_id = (
            await app_client.post("/v1/orders", json=order_payload(foo_customer, (keyboard, 1)))
        ).json()["id"]

        response = await app_client.patch(
            f"/v1/orders/{order_id}/status", json={"status": "lost"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
