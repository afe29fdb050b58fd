"""Energy database models and helpers."""

from db_models.energy.base import EnergyBase
from db_models.energy.models import CountryEnergy, RegionalEnergy
from db_models.energy.session import (
    create_energy_tables,
    energy_db_uri,
    get_energy_engine,
)

__all__ = [
    "CountryEnergy",
    "EnergyBase",
    "RegionalEnergy",
    "create_energy_tables",
    "energy_db_uri",
    "get_energy_engine",
]
