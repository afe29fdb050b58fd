import logging
from logging import Logger

import numpy as np
import pandas as pd
from pandas import DataFrame as DF

from core.pandas_utils import debug_df, left_merge_fill
from energy_etl.contracts import COUNTRY_ENERGY, REGIONAL_ENERGY

LOGGER = logging.getLogger(__name__)

KEY = ["iso_code", "year"]
UNMAPPED_REGION = "Unmapped"
AGGREGATE_PREFIX = "OWID_"
TWH_TO_KWH = 1e9


def _normalized_iso(s: pd.Series) -> pd.Series:
    return s.astype("string").str.strip().str.upper()


def clean_country_frame(df: DF) -> DF:
    """
    Keep one row per country and year.
    Aggregates (no ISO code, or an OWID_ code such as World) are dropped and
    repeated keys keep their last row.
    """
    df = df.copy()
    if "country" in df.columns:
        df["country"] = df["country"].astype("string").str.strip()
    df["iso_code"] = _normalized_iso(df["iso_code"])
    is_aggregate = (
        df["iso_code"].isna()
        | df["iso_code"].eq("").fillna(True)
        | df["iso_code"].str.startswith(AGGREGATE_PREFIX).fillna(True)
    ).astype(bool)
    df = df[~is_aggregate].copy()
    df["year"] = pd.to_numeric(df["year"], errors="coerce")
    return (
        df.dropna(subset=KEY)
        .astype({"year": "int64"})
        .drop_duplicates(subset=KEY, keep="last")
        .reset_index(drop=True)
    )


def clean_taxonomy(taxonomy: DF) -> DF:
    df = taxonomy.copy()
    df["iso_code"] = _normalized_iso(df["iso_code"])
    for col in ("region", "subregion"):
        if col in df.columns:
            df[col] = df[col].astype("string").str.strip()
    return (
        df.dropna(subset=["iso_code"])
        .drop_duplicates(subset=["iso_code"], keep="last")
        .reset_index(drop=True)
    )


def build_country_energy(
    population: DF,
    consumption: DF,
    renewables: DF,
    taxonomy: DF,
    logger: Logger = LOGGER,
) -> DF:
    """
    One row per country and year with population and primary energy.
    Renewables and regions are optional: countries without a region land in
    the Unmapped region.
    """
    pop = clean_country_frame(population)[["iso_code", "country", "year", "population"]]
    cons = clean_country_frame(consumption)[[*KEY, "primary_energy_twh"]]
    ren = clean_country_frame(renewables)[[*KEY, "renewables_share_pct"]]
    tax = clean_taxonomy(taxonomy)[["iso_code", "region", "subregion"]]

    df = (
        pop.merge(cons, on=KEY, how="inner")
        .merge(ren, on=KEY, how="left")
        .pipe(left_merge_fill, tax, on="iso_code", fill={"region": UNMAPPED_REGION})
        .dropna(subset=["population", "primary_energy_twh"])
        .astype({"population": "int64", "primary_energy_twh": "float64"})
    )
    df["renewables_share_pct"] = df["renewables_share_pct"].astype("float64")
    df["renewable_energy_twh"] = df["primary_energy_twh"] * df["renewables_share_pct"] / 100
    df["energy_per_capita_kwh"] = (
        df["primary_energy_twh"] * TWH_TO_KWH / df["population"]
    ).replace([np.inf, -np.inf], np.nan)

    df = df[COUNTRY_ENERGY.column_names].sort_values(KEY).reset_index(drop=True)
    logger.info(
        f"Built country_energy: {len(df)} rows, {df['iso_code'].nunique()} countries, "
        f"{(df['region'] == UNMAPPED_REGION).sum()} unmapped rows"
    )
    return debug_df(df, logger=logger)


def build_regional_energy(country_energy: DF, logger: Logger = LOGGER) -> DF:
    """
    Aggregate countries per region and year.
    Missing renewables count as 0 TWh; the share is NaN when the region used no energy.
    """
    regional = (
        country_energy.assign(
            renewable_energy_twh=country_energy["renewable_energy_twh"].fillna(0.0)
        )
        .groupby(["region", "year"], as_index=False)
        .agg(
            country_count=("iso_code", "nunique"),
            population=("population", "sum"),
            primary_energy_twh=("primary_energy_twh", "sum"),
            renewable_energy_twh=("renewable_energy_twh", "sum"),
        )
    )
    primary = regional["primary_energy_twh"]
    population = regional["population"]
    regional["renewables_share_pct"] = (
        100 * regional["renewable_energy_twh"] / primary.where(primary != 0)
    )
    regional["energy_per_capita_kwh"] = primary * TWH_TO_KWH / population.where(population != 0)

    regional = (
        regional[REGIONAL_ENERGY.column_names]
        .sort_values(["region", "year"])
        .reset_index(drop=True)
    )
    logger.info(f"Built regional_energy: {len(regional)} rows, {regional['region'].nunique()} regions")
    return regional


def latest_year_snapshot(regional: DF) -> DF:
    """The most recent year of each region."""
    if regional.empty:
        return regional.copy()
    latest = regional.groupby("region")["year"].transform("max")
    return (
        regional[regional["year"] == latest]
        .sort_values("region")
        .reset_index(drop=True)
    )
