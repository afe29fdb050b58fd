"""Engine helpers for the energy database."""

from functools import lru_cache

from sqlalchemy import Engine, create_engine

from db_models.core.config import Settings, db_settings
from db_models.energy.base import EnergyBase


def energy_db_uri(settings: Settings = db_settings) -> str:
    """URI of the energy DB, falling back to the shop DB when it is not configured."""
    db_uri = settings.ENERGY_DB_URI or settings.SHOP_DB_URI
    if not db_uri:
        raise ValueError(
            "Neither ENERGY_DB_URI nor SHOP_DB_URI is configured. "
            "Set ENERGY_DB_* or SHOP_DB_* environment variables."
        )
    return db_uri


@lru_cache(maxsize=1)
def get_energy_engine() -> Engine:
    """Return a cached SQLAlchemy engine for the energy DB."""
    return create_engine(energy_db_uri(), future=True)


def create_energy_tables(engine: Engine) -> list[str]:
    """Create the missing energy tables and return the names of all of them."""
    EnergyBase.metadata.create_all(engine)
    return sorted(EnergyBase.metadata.tables)


__all__ = [
    "create_energy_tables",
    "energy_db_uri",
    "get_energy_engine",
]
