import logging
from logging import Logger
from pathlib import Path
from typing import Any

from pandas import DataFrame as DF
from pydantic import BaseModel
from sqlalchemy.engine import Engine

from core.timer_utils import CodeTimer
from db_models.energy import CountryEnergy, RegionalEnergy
from energy_etl.config import EtlSettings, etl_settings
from energy_etl.contracts import COUNTRY_ENERGY, RAW_CONTRACTS, REGIONAL_ENERGY
from energy_etl.extract import extract_dataset
from energy_etl.load import export_csv, load_frame
from energy_etl.transform import (
    build_country_energy,
    build_regional_energy,
    latest_year_snapshot,
)
from energy_etl.validation import assert_valid, quality_checks, validate_frame

LOGGER = logging.getLogger(__name__)


class EnergySources(BaseModel):
    """Locations (paths or URLs) of the four input datasets."""

    population: str
    energy_consumption: str
    renewable_share: str
    region_taxonomy: str

    @classmethod
    def from_settings(cls, settings: EtlSettings = etl_settings) -> "EnergySources":
        return cls(
            population=settings.POPULATION_SOURCE,
            energy_consumption=settings.ENERGY_CONSUMPTION_SOURCE,
            renewable_share=settings.RENEWABLE_SHARE_SOURCE,
            region_taxonomy=settings.REGION_TAXONOMY_SOURCE,
        )


def extract_sources(sources: EnergySources, logger: Logger = LOGGER) -> dict[str, DF]:
    """Extract and contract-validate every dataset, raising on blocking failures."""
    frames = {}
    for dataset, contract in RAW_CONTRACTS.items():
        df = extract_dataset(dataset, getattr(sources, dataset), logger)
        assert_valid(validate_frame(df, contract), logger)
        frames[dataset] = df
    return frames


def run_pipeline(
    sources: EnergySources | None = None,
    engine: Engine | None = None,
    output_dir: str | Path | None = None,
    min_years: int | None = None,
    logger: Logger = LOGGER,
) -> dict[str, Any]:
    """
    Run extract, transform, quality checks and load without the orchestrator.

    Loads into `engine` and exports CSV snapshots into `output_dir` when given.
    Raises DataValidationError when a blocking check fails.
    """
    sources = sources or EnergySources.from_settings()
    min_years = etl_settings.MIN_YEARS if min_years is None else min_years
    timer = CodeTimer("energy_etl", logger)

    with timer.step("extract"):
        frames = extract_sources(sources, logger)

    with timer.step("transform"):
        country = build_country_energy(
            frames["population"],
            frames["energy_consumption"],
            frames["renewable_share"],
            frames["region_taxonomy"],
            logger=logger,
        )
        regional = build_regional_energy(country, logger=logger)

    with timer.step("quality"):
        outcomes = [
            *validate_frame(country, COUNTRY_ENERGY),
            *validate_frame(regional, REGIONAL_ENERGY),
            *quality_checks(
                country,
                regional,
                frames["region_taxonomy"],
                min_years=min_years,
                rtol=etl_settings.RECONCILE_RTOL,
            ),
        ]
        assert_valid(outcomes, logger)

    loaded = {}
    if engine is not None:
        with timer.step("load"):
            loaded["country_energy"] = load_frame(
                country, CountryEnergy, engine, COUNTRY_ENERGY.key, logger
            )
            loaded["regional_energy"] = load_frame(
                regional, RegionalEnergy, engine, REGIONAL_ENERGY.key, logger
            )

    exported = []
    if output_dir is not None:
        with timer.step("export"):
            output_dir = Path(output_dir)
            exported = [
                str(export_csv(country, output_dir / "country_energy.csv", logger)),
                str(export_csv(regional, output_dir / "regional_energy.csv", logger)),
                str(
                    export_csv(
                        latest_year_snapshot(regional),
                        output_dir / "regional_energy_latest.csv",
                        logger,
                    )
                ),
            ]

    return {
        "rows": {
            **{dataset: len(df) for dataset, df in frames.items()},
            "country_energy": len(country),
            "regional_energy": len(regional),
        },
        "loaded": loaded,
        "exported": exported,
        "checks": [outcome.model_dump() for outcome in outcomes],
        "warnings": [outcome.name for outcome in outcomes if not outcome.passed],
        "timings": timer.summary(),
    }
