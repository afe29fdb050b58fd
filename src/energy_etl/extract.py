import logging
from logging import Logger
from pathlib import Path

import pandas as pd
from pandas import DataFrame as DF

from core.pandas_utils import normalize_columns
from energy_etl.contracts import RAW_CONTRACTS
from energy_etl.errors import ExtractError

LOGGER = logging.getLogger(__name__)

# Header variants seen in the OWID exports and the ISO-3166 region list.
COLUMN_ALIASES: dict[str, dict[str, str]] = {
    "population": {
        "entity": "country",
        "code": "iso_code",
        "population_historical": "population",
        "population (historical)": "population",
    },
    "energy_consumption": {
        "entity": "country",
        "code": "iso_code",
        "primary_energy_consumption": "primary_energy_twh",
        "primary energy consumption (twh)": "primary_energy_twh",
    },
    "renewable_share": {
        "entity": "country",
        "code": "iso_code",
        "renewables_share_energy": "renewables_share_pct",
        "renewables (% equivalent primary energy)": "renewables_share_pct",
    },
    "region_taxonomy": {
        "name": "country",
        "alpha-3": "iso_code",
        "alpha_3": "iso_code",
        "sub-region": "subregion",
        "sub_region": "subregion",
    },
}


def read_source(dataset: str, location: str | Path) -> DF:
    """Read a CSV from a local path or an http(s) URL."""
    try:
        # "NA" is Namibia's ISO code, only empty cells are missing.
        return pd.read_csv(location, keep_default_na=False, na_values=[""])
    except (OSError, ValueError) as e:
        raise ExtractError(dataset, location, e) from e


def extract_dataset(dataset: str, location: str | Path, logger: Logger = LOGGER) -> DF:
    """
    Read one dataset and bring it to its contract's column names.
    Columns outside the contract are dropped, missing ones are left to validation.
    """
    if dataset not in RAW_CONTRACTS:
        raise ValueError(f"Unknown dataset {dataset!r}, expected one of {list(RAW_CONTRACTS)}")
    df = normalize_columns(read_source(dataset, location), COLUMN_ALIASES[dataset])
    contract = RAW_CONTRACTS[dataset]
    df = df[[col for col in contract.column_names if col in df.columns]]
    logger.info(f"Extracted {len(df)} {dataset} rows from {location}")
    return df


def extract_population(location: str | Path, logger: Logger = LOGGER) -> DF:
    return extract_dataset("population", location, logger)


def extract_energy_consumption(location: str | Path, logger: Logger = LOGGER) -> DF:
    return extract_dataset("energy_consumption", location, logger)


def extract_renewable_share(location: str | Path, logger: Logger = LOGGER) -> DF:
    return extract_dataset("renewable_share", location, logger)


def extract_region_taxonomy(location: str | Path, logger: Logger = LOGGER) -> DF:
    return extract_dataset("region_taxonomy", location, logger)
