import uuid
from decimal import Decimal

import click
from rich.console import Console
from rich.table import Table

from core.logging_utils import set_level_of_loggers_with_prefix
from db_models import Order, OrderStatusEnum
from db_models.session import create_all, get_engine, session_scope
from shop import customers, items, orders
from shop.errors import ShopError

console = Console()


def _parse_line(value: str) -> tuple[uuid.UUID, int]:
    try:
        item_id, quantity = value.rsplit(":", 1)
        return uuid.UUID(item_id), int(quantity)
    except ValueError as e:
        raise click.BadParameter(
            f"{value!r} is not ITEM_ID:QUANTITY", param_hint="--line"
        ) from e


def _print_order(order: Order) -> None:
    table = Table(title=f"Order {order.id} ({order.status.value})")
    table.add_column("sku")
    table.add_column("item")
    table.add_column("quantity", justify="right")
    table.add_column("unit price", justify="right")
    table.add_column("subtotal", justify="right")
    for line in order.lines:
        table.add_row(
            line.item.sku,
            line.item.name,
            str(line.quantity),
            f"{Decimal(line.unit_price):.2f}",
            f"{line.subtotal:.2f}",
        )
    table.add_row("", "", "", "total", f"{order.total:.2f}")
    console.print(table)


class ShopGroup(click.Group):
    """Turn shop domain errors into clean CLI errors."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except ShopError as e:
            raise click.ClickException(str(e)) from e


@click.group(cls=ShopGroup)
@click.option("--log-level", default="INFO", show_default=True)
def cli(log_level: str):
    """Manage shop customers, items and orders."""
    set_level_of_loggers_with_prefix(log_level.upper(), "shop")


@cli.command("init-db")
def init_db():
    """Create the shop tables."""
    create_all(get_engine())
    click.echo("Shop tables created.")


@cli.command("add-customer")
@click.argument("name")
@click.argument("email")
def add_customer(name: str, email: str):
    with session_scope() as session:
        customer = customers.create_customer(session, name, email)
        click.echo(str(customer.id))


@cli.command("add-address")
@click.argument("customer_id", type=click.UUID)
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--postal-code", required=True)
@click.option("--country", required=True, help="ISO 3166-1 alpha-2 code")
@click.option("--default", "is_default", is_flag=True)
def add_address(customer_id, street, city, postal_code, country, is_default):
    with session_scope() as session:
        address = customers.add_address(
            session, customer_id, street, city, postal_code, country, is_default
        )
        click.echo(str(address.id))


@cli.command("add-item")
@click.argument("sku")
@click.argument("name")
@click.argument("unit_price")
@click.option("--description")
def add_item(sku, name, unit_price, description):
    with session_scope() as session:
        item = items.create_item(session, sku, name, unit_price, description)
        click.echo(str(item.id))


@cli.command("place-order")
@click.argument("customer_id", type=click.UUID)
@click.option("--line", "lines", multiple=True, required=True, help="ITEM_ID:QUANTITY")
@click.option("--address-id", type=click.UUID)
def place_order(customer_id, lines, address_id):
    with session_scope() as session:
        order = orders.place_order(
            session, customer_id, [_parse_line(line) for line in lines], address_id
        )
        _print_order(order)


@cli.command("show-order")
@click.argument("order_id", type=click.UUID)
def show_order(order_id):
    with session_scope() as session:
        _print_order(orders.get_order(session, order_id))


@cli.command("list-orders")
@click.argument("customer_id", type=click.UUID)
@click.option("--status", type=click.Choice([s.value for s in OrderStatusEnum]))
def list_orders(customer_id, status):
    with session_scope() as session:
        found = orders.list_orders(
            session, customer_id, OrderStatusEnum(status) if status else None
        )
        for order in found:
            click.echo(
                f"{order.id}  {order.placed_at:%Y-%m-%d %H:%M}  "
                f"{order.status.value:<9}  {order.total:>10.2f}"
            )


@cli.command("set-status")
@click.argument("order_id", type=click.UUID)
@click.argument("status", type=click.Choice([s.value for s in OrderStatusEnum]))
def set_status(order_id, status):
    with session_scope() as session:
        order = orders.update_order_status(session, order_id, OrderStatusEnum(status))
        click.echo(f"{order.id} is now {order.status.value}")


if __name__ == "__main__":
    cli()
