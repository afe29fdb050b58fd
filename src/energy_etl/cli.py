import logging

import click
from rich.console import Console
from rich.table import Table
from sqlalchemy import create_engine

from core.logging_utils import set_level_of_loggers_with_prefix
from db_models.energy import create_energy_tables, get_energy_engine
from energy_etl.config import etl_settings
from energy_etl.errors import EnergyEtlError
from energy_etl.pipeline import EnergySources, run_pipeline

LOGGER = logging.getLogger("energy_etl.cli")
console = Console()


@click.group()
def cli():
    """Country and regional energy ETL."""


@cli.command("run")
@click.option("--output-dir", type=click.Path(file_okay=False), default=etl_settings.OUTPUT_DIR)
@click.option("--db-uri", help="Load the results into this database.")
@click.option("--log-level", default="INFO", show_default=True)
@click.option("--population", default=etl_settings.POPULATION_SOURCE, show_default=True)
@click.option(
    "--energy-consumption", default=etl_settings.ENERGY_CONSUMPTION_SOURCE, show_default=True
)
@click.option(
    "--renewable-share", default=etl_settings.RENEWABLE_SHARE_SOURCE, show_default=True
)
@click.option(
    "--region-taxonomy", default=etl_settings.REGION_TAXONOMY_SOURCE, show_default=True
)
@click.option("--min-years", type=int, default=etl_settings.MIN_YEARS, show_default=True)
def run(
    output_dir,
    db_uri,
    log_level,
    population,
    energy_consumption,
    renewable_share,
    region_taxonomy,
    min_years,
):
    """Extract, transform, check and load the energy datasets."""
    set_level_of_loggers_with_prefix(log_level.upper(), "energy_etl")
    sources = EnergySources(
        population=population,
        energy_consumption=energy_consumption,
        renewable_share=renewable_share,
        region_taxonomy=region_taxonomy,
    )
    engine = create_engine(db_uri) if db_uri else None
    try:
        summary = run_pipeline(sources, engine, output_dir, min_years=min_years, logger=LOGGER)
    except EnergyEtlError as e:
        raise click.ClickException(str(e)) from e
    finally:
        if engine is not None:
            engine.dispose()

    table = Table(title="energy_etl")
    table.add_column("dataset")
    table.add_column("rows", justify="right")
    table.add_column("loaded", justify="right")
    for dataset, rows in summary["rows"].items():
        table.add_row(dataset, str(rows), str(summary["loaded"].get(dataset, "")))
    console.print(table)
    for name in summary["warnings"]:
        console.print(f"[yellow]warning[/yellow] {name}")
    for path in summary["exported"]:
        console.print(f"exported {path}")


@cli.command("init-db")
@click.option("--db-uri", help="Defaults to ENERGY_DB_URI, then SHOP_DB_URI.")
@click.option("--log-level", default="INFO", show_default=True)
def init_db(db_uri, log_level):
    """Create the country and regional energy tables."""
    set_level_of_loggers_with_prefix(log_level.upper(), "energy_etl")
    if db_uri:
        engine = create_engine(db_uri)
    else:
        try:
            engine = get_energy_engine()
        except ValueError as e:
            raise click.ClickException(str(e)) from e
    try:
        tables = create_energy_tables(engine)
    finally:
        if db_uri:
            engine.dispose()
    LOGGER.info(f"Energy tables ready: {', '.join(tables)}")
    console.print(f"created {', '.join(tables)}")


if __name__ == "__main__":
    cli()
