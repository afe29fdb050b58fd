"""Code location of the energy ETL."""

import dagster as dg

from db_models.energy import energy_db_uri
from energy_dagster.defs import assets
from energy_dagster.defs.checks import ENERGY_ASSET_CHECKS
from energy_dagster.defs.resources import EnergyDatabaseResource, EnergySourcesResource
from energy_dagster.defs.schedules import energy_etl_job, energy_refresh_schedule
from energy_dagster.defs.sensors import energy_etl_failure_sensor

defs = dg.Definitions(
    assets=dg.load_assets_from_modules([assets]),
    asset_checks=ENERGY_ASSET_CHECKS,
    jobs=[energy_etl_job],
    schedules=[energy_refresh_schedule],
    sensors=[energy_etl_failure_sensor],
    resources={
        "sources": EnergySourcesResource(),
        "database": EnergyDatabaseResource(uri=energy_db_uri()),
    },
)
