"""Init shop DB

Revision ID: 202610180900
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610180900"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "id", sa.Uuid(), nullable=False, comment="Unique identifier of the row"
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Date of creation of this row",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Date of the last update to this row",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "customer",
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        *_base_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        comment="People who place orders in the shop.",
    )
    op.create_table(
        "item",
        sa.Column("sku", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("unit_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base_columns(),
        sa.CheckConstraint("unit_price >= 0", name="ck_item_unit_price"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku"),
        comment="Products that can be ordered.",
    )
    op.create_table(
        "address",
        sa.Column("customer_id", sa.Uuid(), nullable=False),
        sa.Column("street", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("postal_code", sa.String(length=20), nullable=False),
        sa.Column(
            "country",
            sa.String(length=2),
            nullable=False,
            comment="ISO 3166-1 alpha-2 country code",
        ),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        *_base_columns(),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        comment="Postal addresses a customer can ship orders to.",
    )
    op.create_index("ix_address_customer_id", "address", ["customer_id"])
    op.create_table(
        "order",
        sa.Column("customer_id", sa.Uuid(), nullable=False),
        sa.Column("shipping_address_id", sa.Uuid(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "paid", "shipped", "cancelled", name="order_status"),
            nullable=False,
        ),
        sa.Column("placed_at", sa.DateTime(timezone=True), nullable=False),
        *_base_columns(),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["shipping_address_id"], ["address.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        comment="Orders placed by customers.",
    )
    op.create_index("ix_order_customer_id", "order", ["customer_id"])
    op.create_table(
        "order_line",
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("item_id", sa.Uuid(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column(
            "unit_price",
            sa.Numeric(precision=10, scale=2),
            nullable=False,
            comment="Price of the item when the order was placed",
        ),
        *_base_columns(),
        sa.CheckConstraint("quantity > 0", name="ck_order_line_quantity"),
        sa.ForeignKeyConstraint(["item_id"], ["item.id"]),
        sa.ForeignKeyConstraint(["order_id"], ["order.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order_id", "item_id", name="uq_order_line_order_item"),
        comment="One item of an order, with the price it was sold at.",
    )


def downgrade() -> None:
    op.drop_table("order_line")
    op.drop_index("ix_order_customer_id", table_name="order")
    op.drop_table("order")
    op.drop_index("ix_address_customer_id", table_name="address")
    op.drop_table("address")
    op.drop_table("item")
    op.drop_table("customer")
    sa.Enum(name="order_status").drop(op.get_bind(), checkfirst=True)
