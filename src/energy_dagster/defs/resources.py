"""Resource definitions for Dagster."""

import dagster as dg
from pydantic import Field
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from energy_etl.config import etl_settings


class EnergySourcesResource(dg.ConfigurableResource):
    """Locations of the four input datasets. Defaults to the bundled sample data."""

    population: str = Field(default=etl_settings.POPULATION_SOURCE)
    energy_consumption: str = Field(default=etl_settings.ENERGY_CONSUMPTION_SOURCE)
    renewable_share: str = Field(default=etl_settings.RENEWABLE_SHARE_SOURCE)
    region_taxonomy: str = Field(default=etl_settings.REGION_TAXONOMY_SOURCE)


class EnergyDatabaseResource(dg.ConfigurableResource):
    """Database receiving the country and regional tables."""

    uri: str

    def get_engine(self) -> Engine:
        return create_engine(self.uri)
