import pytest

from energy_etl.config import DATA_DIR
from energy_etl.errors import ExtractError
from energy_etl.extract import (
    extract_dataset,
    extract_energy_consumption,
    extract_population,
    extract_region_taxonomy,
    extract_renewable_share,
)


class TestBundledSources:
    def test_population(self):
        df = extract_population(DATA_DIR / "population.csv")

        assert list(df.columns) == ["country", "iso_code", "year", "population"]
        assert len(df) == 28

    def test_energy_consumption_is_renamed_and_trimmed(self):
        df = extract_energy_consumption(DATA_DIR / "energy_consumption.csv")

        assert list(df.columns) == ["country", "iso_code", "year", "primary_energy_twh"]
        assert "gdp" not in df.columns

    def test_renewable_share(self):
        df = extract_renewable_share(DATA_DIR / "renewable_share.csv")

        assert "renewables_share_pct" in df.columns

    def test_region_taxonomy(self):
        df = extract_region_taxonomy(DATA_DIR / "region_taxonomy.csv")

        assert list(df.columns) == ["iso_code", "country", "region", "subregion"]
        assert df.set_index("iso_code").loc["IND", "subregion"] == "Southern Asia"

    def test_aggregates_without_code_are_missing(self):
        df = extract_population(DATA_DIR / "population.csv")

        assert df["iso_code"].isna().sum() == 3


def test_headers_are_normalized(tmp_path):
    path = tmp_path / "population.csv"
    path.write_text(" Entity ,Code,YEAR,Population (historical)\nNamibia,NA,2020,2489000\n")

    df = extract_dataset("population", path)

    assert list(df.columns) == ["country", "iso_code", "year", "population"]
    assert df.loc[0, "iso_code"] == "NA"


def test_missing_columns_are_left_for_validation(tmp_path):
    path = tmp_path / "population.csv"
    path.write_text("country,iso_code,year\nFrance,FRA,2020\n")

    df = extract_dataset("population", path)

    assert list(df.columns) == ["country", "iso_code", "year"]


def test_missing_file(tmp_path):
    with pytest.raises(ExtractError) as exc_info:
        extract_population(tmp_path / "nope.csv")

    assert exc_info.value.dataset == "population"
    assert "nope.csv" in str(exc_info.value)


def test_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")

    with pytest.raises(ExtractError):
        extract_renewable_share(path)


def test_unknown_dataset(tmp_path):
    with pytest.raises(ValueError, match="Unknown dataset"):
        extract_dataset("gdp", tmp_path / "gdp.csv")
