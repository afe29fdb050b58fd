from db_models.customer import (
    Address,
    Customer,
)
from db_models.enums import OrderStatusEnum
from db_models.order import (
    Item,
    Order,
    OrderLine,
)

__all__ = [
    "Address",
    "Customer",
    "Item",
    "Order",
    "OrderLine",
    "OrderStatusEnum",
]
