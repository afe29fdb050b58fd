"""
Factory exports for polyfactory-based test data generation.

Usage:
    from tests.factories import CustomerFactory, ItemFactory

    async def test_something(db_session):
        customer = await CustomerFactory.create_async(
            session=db_session,
            email="custom@example.com"
        )
"""

from tests.factories.shop import AddressFactory, CustomerFactory, ItemFactory

__all__ = [
    "AddressFactory",
    "CustomerFactory",
    "ItemFactory",
]
