"""Engine and session helpers for the shop database, sync and async."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Session, sessionmaker

from db_models.base_uuid_model import Base
from db_models.core.config import db_settings

logger = logging.getLogger(__name__)


def _engine_kwargs(uri: str) -> dict:
    """Pool options only make sense for server databases."""
    if make_url(uri).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": db_settings.POOL_SIZE,
        "pool_timeout": 30,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
    }


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return a cached sync engine for the shop database."""
    uri = db_settings.SHOP_DB_URI
    if not uri:
        raise ValueError(
            "SHOP_DB_URI is not configured. Check SHOP_DB_* environment variables."
        )
    return create_engine(uri, echo=db_settings.DB_ECHO, **_engine_kwargs(uri))


def get_sessionmaker(engine: Engine | None = None) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine or get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


@contextmanager
def session_scope(engine: Engine | None = None) -> Generator[Session, None, None]:
    """Transactional scope: commit on success, rollback on error."""
    session = get_sessionmaker(engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


_async_engine: AsyncEngine | None = None
_async_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_async_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    global _async_engine
    if _async_engine is None:
        uri = db_settings.ASYNC_SHOP_DB_URI
        _async_engine = create_async_engine(
            uri, echo=db_settings.DB_ECHO, **_engine_kwargs(uri)
        )
    return _async_engine


def get_async_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session maker."""
    global _async_session_maker
    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.
    To be used as a FastAPI dependency.
    """
    session = get_async_sessionmaker()()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def dispose_async_engine() -> None:
    global _async_engine, _async_session_maker
    if _async_engine is not None:
        await _async_engine.dispose()
        logger.info("Async engine disposed")
    _async_engine = None
    _async_session_maker = None


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(engine)


async def async_create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
