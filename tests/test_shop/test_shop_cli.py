import uuid

import click
import pytest
from click.testing import CliRunner
from sqlalchemy import Engine, func, select

from db_models import Customer, Order, OrderStatusEnum
from db_models.session import get_sessionmaker
from shop.cli import _parse_line, cli


@pytest.fixture
def runner(engine: Engine, monkeypatch) -> CliRunner:
    """CLI runner whose commands use the in-memory test database."""
    monkeypatch.setattr("db_models.session.get_engine", lambda: engine)
    monkeypatch.setattr("shop.cli.get_engine", lambda: engine)
    return CliRunner()


def invoke(runner: CliRunner, *args: str) -> str:
    result = runner.invoke(cli, ["--log-level", "WARNING", *args], catch_exceptions=False)
    assert result.exit_code == 0, result.output
    return result.output.strip()


def test_parse_line():
    item_id = uuid.uuid4()

    assert _parse_line(f"{item_id}:3") == (item_id, 3)


def test_parse_line_rejects_garbage():
    with pytest.raises(click.BadParameter, match="ITEM_ID:QUANTITY"):
        _parse_line("not-a-line")


def test_init_db(runner: CliRunner):
    assert invoke(runner, "init-db") == "Shop tables created."


def test_order_workflow(runner: CliRunner, engine: Engine):
    customer_id = invoke(runner, "add-customer", "Grace Hopper", "grace@example.com")
    invoke(
        runner,
        "add-address",
        customer_id,
        "--street", "1 Main St",
        "--city", "Paris",
        "--postal-code", "75001",
        "--country", "FR",
    )
    item_id = invoke(runner, "add-item", "KB-001", "Keyboard", "49.90")

    output = invoke(runner, "place-order", customer_id, "--line", f"{item_id}:2")
    assert "KB-001" in output
    assert "99.80" in output

    with get_sessionmaker(engine)() as session:
        order = session.scalar(select(Order))
        assert str(order.customer_id) == customer_id

    assert invoke(runner, "set-status", str(order.id), "paid") == f"{order.id} is now paid"
    listed = invoke(runner, "list-orders", customer_id, "--status", "paid")
    assert str(order.id) in listed
    assert "99.80" in listed
    assert invoke(runner, "list-orders", customer_id, "--status", "cancelled") == ""


def test_domain_errors_become_cli_errors(runner: CliRunner, engine: Engine):
    invoke(runner, "add-customer", "Grace", "grace@example.com")

    result = runner.invoke(cli, ["add-customer", "Again", "GRACE@example.com"])

    assert result.exit_code == 1
    assert "already exists" in result.output
    with get_sessionmaker(engine)() as session:
        assert session.scalar(select(func.count()).select_from(Customer)) == 1


def test_invalid_transition_is_reported(runner: CliRunner, engine: Engine):
    customer_id = invoke(runner, "add-customer", "Grace", "grace@example.com")
    item_id = invoke(runner, "add-item", "KB-001", "Keyboard", "49.90")
    invoke(runner, "place-order", customer_id, "--line", f"{item_id}:1")
    with get_sessionmaker(engine)() as session:
        order_id = session.scalar(select(Order.id))

    result = runner.invoke(cli, ["set-status", str(order_id), OrderStatusEnum.shipped.value])

    assert result.exit_code == 1
    assert "Cannot move an order" in result.output


def test_negative_price_is_rejected(runner: CliRunner):
    result = runner.invoke(cli, ["add-item", "KB-001", "Keyboard", "--", "-1"])

    assert result.exit_code == 1
    assert "unit_price" in result.output
