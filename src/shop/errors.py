"""Exceptions raised by the shop service layers."""


class ShopError(Exception):
    """Base class for every shop domain error."""


class NotFoundError(ShopError):
    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class DuplicateEmailError(ShopError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A customer with email {email!r} already exists")


class DuplicateSkuError(ShopError):
    def __init__(self, sku: str):
        self.sku = sku
        super().__init__(f"An item with sku {sku!r} already exists")


class InvalidOrderError(ShopError):
    pass


class InvalidStatusTransition(ShopError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move an order from {current.value!r} to {target.value!r}"
        )


class InvalidItemError(ShopError):
    pass
