"""
Small country frames whose derived values are easy to compute by hand.

France and Germany are in Europe, Atlantis has no region, World and Europe
are aggregates that cleaning drops.
"""

import pandas as pd
import pytest


@pytest.fixture
def population_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "country": ["France", "France", "Germany", "Atlantis", "World", "Europe"],
            "iso_code": ["FRA", "FRA", "DEU", "ATL", "OWID_WRL", None],
            "year": [2020, 2021, 2020, 2020, 2020, 2020],
            "population": [100, 110, 200, 10, 1000, 500],
        }
    )


@pytest.fixture
def consumption_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "country": ["France", "France", "Germany", "Atlantis", "World"],
            "iso_code": ["FRA", "FRA", "DEU", "ATL", "OWID_WRL"],
            "year": [2020, 2021, 2020, 2020, 2020],
            "primary_energy_twh": [1.0, 2.0, 3.0, 0.5, 50.0],
        }
    )


@pytest.fixture
def renewables_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "country": ["France", "Germany", "World"],
            "iso_code": ["FRA", "DEU", "OWID_WRL"],
            "year": [2020, 2020, 2020],
            "renewables_share_pct": [10.0, 50.0, 12.0],
        }
    )


@pytest.fixture
def taxonomy_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "iso_code": ["FRA", "DEU"],
            "country": ["France", "Germany"],
            "region": ["Europe", "Europe"],
            "subregion": ["Western Europe", "Western Europe"],
        }
    )


@pytest.fixture
def country_energy_df(population_df, consumption_df, renewables_df, taxonomy_df):
    from energy_etl.transform import build_country_energy

    return build_country_energy(population_df, consumption_df, renewables_df, taxonomy_df)


@pytest.fixture
def regional_energy_df(country_energy_df):
    from energy_etl.transform import build_regional_energy

    return build_regional_energy(country_energy_df)
