"""
Shared test fixtures for all tests.
Provides sync and async database sessions, the API test client, and seed data.
"""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from db_models import Address, Customer, Item
from db_models.session import async_create_all, create_all, get_db, get_sessionmaker
from shop_api.app import app
from tests.factories import AddressFactory, CustomerFactory, ItemFactory

# In-memory databases, one per test. StaticPool keeps the single connection
# alive so every session of a test sees the same data.
SYNC_TEST_DB_URI = "sqlite://"
ASYNC_TEST_DB_URI = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        SYNC_TEST_DB_URI,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    """Sync session, rolled back after each test."""
    with get_sessionmaker(engine)() as session:
        yield session
        session.rollback()


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        ASYNC_TEST_DB_URI,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await async_create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a new async session for each test.
    The database itself is thrown away with the engine.
    """
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def app_client(
    db_session: AsyncSession,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Create an async HTTP client for testing FastAPI endpoints with database session override.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Seed Data Fixtures - Minimal test data
# ============================================================================


@pytest_asyncio.fixture
async def foo_customer(db_session: AsyncSession) -> Customer:
    """Create a foo customer."""
    return await CustomerFactory.create_async(
        session=db_session, name="Foo Customer", email="foo@example.com"
    )


@pytest_asyncio.fixture
async def foo_address(db_session: AsyncSession, foo_customer: Customer) -> Address:
    """Create the default address of the foo customer."""
    return await AddressFactory.create_async(
        session=db_session, customer_id=foo_customer.id, is_default=True
    )


@pytest_asyncio.fixture
async def keyboard(db_session: AsyncSession) -> Item:
    return await ItemFactory.create_async(
        session=db_session, sku="KB-001", name="Keyboard", unit_price=Decimal("49.90")
    )


@pytest_asyncio.fixture
async def mouse(db_session: AsyncSession) -> Item:
    return await ItemFactory.create_async(
        session=db_session, sku="MS-001", name="Mouse", unit_price=Decimal("19.99")
    )


@pytest_asyncio.fixture
async def retired_item(db_session: AsyncSession) -> Item:
    return await ItemFactory.create_async(
        session=db_session, sku="OLD-001", name="Floppy drive", is_active=False
    )
