"""Energy ETL assets: extract, transform and load."""

import dagster as dg
from pandas import DataFrame as DF

from core.pandas_utils import frame_to_markdown
from db_models.energy import CountryEnergy, RegionalEnergy
from energy_dagster.defs.resources import EnergyDatabaseResource, EnergySourcesResource
from energy_etl.contracts import COUNTRY_ENERGY, RAW_CONTRACTS, REGIONAL_ENERGY
from energy_etl.extract import extract_dataset
from energy_etl.load import load_frame
from energy_etl.transform import build_country_energy, build_regional_energy
from energy_etl.validation import assert_valid, validate_frame


def frame_metadata(df: DF) -> dict:
    return {
        "row_count": dg.MetadataValue.int(len(df)),
        "columns": dg.MetadataValue.text(", ".join(map(str, df.columns))),
        "preview": dg.MetadataValue.md(frame_to_markdown(df)),
    }


def _extract(context: dg.AssetExecutionContext, dataset: str, location: str) -> dg.Output[DF]:
    df = extract_dataset(dataset, location, logger=context.log)
    outcomes = assert_valid(validate_frame(df, RAW_CONTRACTS[dataset]), logger=context.log)
    failed = [outcome.name for outcome in outcomes if not outcome.passed]
    return dg.Output(
        df,
        metadata={
            **frame_metadata(df),
            "source": dg.MetadataValue.path(location),
            "warnings": dg.MetadataValue.text(", ".join(failed) or "none"),
        },
    )


@dg.asset(group_name="extract", kinds={"pandas"})
def population_raw(
    context: dg.AssetExecutionContext, sources: EnergySourcesResource
) -> dg.Output[DF]:
    """Population per country and year."""
    return _extract(context, "population", sources.population)


@dg.asset(group_name="extract", kinds={"pandas"})
def energy_consumption_raw(
    context: dg.AssetExecutionContext, sources: EnergySourcesResource
) -> dg.Output[DF]:
    """Primary energy consumption (TWh) per country and year."""
    return _extract(context, "energy_consumption", sources.energy_consumption)


@dg.asset(group_name="extract", kinds={"pandas"})
def renewable_share_raw(
    context: dg.AssetExecutionContext, sources: EnergySourcesResource
) -> dg.Output[DF]:
    """Share of primary energy from renewables (%) per country and year."""
    return _extract(context, "renewable_share", sources.renewable_share)


@dg.asset(group_name="extract", kinds={"pandas"})
def region_taxonomy(
    context: dg.AssetExecutionContext, sources: EnergySourcesResource
) -> dg.Output[DF]:
    """Region and subregion of each ISO country code."""
    return _extract(context, "region_taxonomy", sources.region_taxonomy)


@dg.asset(group_name="transform", kinds={"pandas"})
def country_energy(
    context: dg.AssetExecutionContext,
    population_raw: DF,
    energy_consumption_raw: DF,
    renewable_share_raw: DF,
    region_taxonomy: DF,
) -> dg.Output[DF]:
    """Country energy per year with renewables and region."""
    df = build_country_energy(
        population_raw,
        energy_consumption_raw,
        renewable_share_raw,
        region_taxonomy,
        logger=context.log,
    )
    assert_valid(validate_frame(df, COUNTRY_ENERGY), logger=context.log)
    return dg.Output(df, metadata=frame_metadata(df))


@dg.asset(group_name="transform", kinds={"pandas"})
def regional_energy(context: dg.AssetExecutionContext, country_energy: DF) -> dg.Output[DF]:
    """Country energy aggregated per region and year."""
    df = build_regional_energy(country_energy, logger=context.log)
    assert_valid(validate_frame(df, REGIONAL_ENERGY), logger=context.log)
    return dg.Output(df, metadata=frame_metadata(df))


def _load(
    context: dg.AssetExecutionContext,
    df: DF,
    model,
    key_cols: list[str],
    database: EnergyDatabaseResource,
) -> dg.MaterializeResult:
    engine = database.get_engine()
    try:
        rows = load_frame(df, model, engine, key_cols, logger=context.log)
    finally:
        engine.dispose()
    return dg.MaterializeResult(
        metadata={
            **frame_metadata(df),
            "row_count": dg.MetadataValue.int(rows),
            "table": dg.MetadataValue.text(model.__tablename__),
        }
    )


@dg.asset(group_name="load", kinds={"sqlalchemy"})
def country_energy_table(
    context: dg.AssetExecutionContext,
    country_energy: DF,
    database: EnergyDatabaseResource,
) -> dg.MaterializeResult:
    """The country_energy table, replaced on every run."""
    return _load(context, country_energy, CountryEnergy, COUNTRY_ENERGY.key, database)


@dg.asset(group_name="load", kinds={"sqlalchemy"})
def regional_energy_table(
    context: dg.AssetExecutionContext,
    regional_energy: DF,
    database: EnergyDatabaseResource,
) -> dg.MaterializeResult:
    """The regional_energy table, replaced on every run."""
    return _load(context, regional_energy, RegionalEnergy, REGIONAL_ENERGY.key, database)
