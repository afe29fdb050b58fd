import shutil

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine, func, select

from db_models.energy import CountryEnergy, RegionalEnergy
from energy_etl.cli import cli
from energy_etl.config import DATA_DIR
from energy_etl.errors import DataValidationError
from energy_etl.pipeline import EnergySources, run_pipeline


@pytest.fixture
def broken_sources(tmp_path) -> EnergySources:
    """Bundled sources with an impossible renewable share."""
    renewables = tmp_path / "renewable_share.csv"
    shutil.copy(DATA_DIR / "renewable_share.csv", renewables)
    with renewables.open("a") as f:
        f.write("Spain,2021,ESP,150.0\n")
    sources = EnergySources.from_settings()
    return sources.model_copy(update={"renewable_share": str(renewables)})


class TestRunPipeline:
    def test_bundled_data(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'energy.db'}")

        summary = run_pipeline(
            EnergySources.from_settings(), engine, tmp_path / "out", min_years=3
        )

        assert summary["rows"] == {
            "population": 28,
            "energy_consumption": 23,
            "renewable_share": 20,
            "region_taxonomy": 7,
            "country_energy": 20,
            "regional_energy": 11,
        }
        assert summary["loaded"] == {"country_energy": 20, "regional_energy": 11}
        assert summary["warnings"] == ["unmapped_countries", "year_coverage"]
        assert sorted(p.rsplit("/", 1)[-1] for p in summary["exported"]) == [
            "country_energy.csv",
            "regional_energy.csv",
            "regional_energy_latest.csv",
        ]
        assert set(summary["timings"]) == {"extract", "transform", "quality", "load", "export", "total"}
        with engine.connect() as conn:
            assert conn.scalar(select(func.count()).select_from(RegionalEnergy)) == 11
            regions = set(conn.scalars(select(CountryEnergy.region).distinct()))
        assert regions == {"Americas", "Asia", "Europe", "Unmapped"}
        engine.dispose()

    def test_without_engine_or_output(self):
        summary = run_pipeline(min_years=1)

        assert summary["loaded"] == {}
        assert summary["exported"] == []
        assert summary["warnings"] == ["unmapped_countries"]

    def test_blocking_failure(self, broken_sources, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'energy.db'}")

        with pytest.raises(DataValidationError) as exc_info:
            run_pipeline(broken_sources, engine)

        assert [o.name for o in exc_info.value.outcomes] == ["renewables_share_pct_range"]
        with engine.connect() as conn:
            assert not engine.dialect.has_table(conn, "country_energy")
        engine.dispose()


class TestCli:
    def test_run(self, tmp_path):
        db_path = tmp_path / "energy.db"

        result = CliRunner().invoke(
            cli,
            [
                "run",
                "--output-dir", str(tmp_path / "out"),
                "--db-uri", f"sqlite:///{db_path}",
                "--log-level", "WARNING",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "country_energy" in result.output
        assert (tmp_path / "out" / "regional_energy_latest.csv").exists()
        assert db_path.exists()

    def test_run_reports_blocking_failures(self, broken_sources):
        result = CliRunner().invoke(
            cli,
            ["run", "--renewable-share", broken_sources.renewable_share, "--log-level", "WARNING"],
        )

        assert result.exit_code == 1
        assert "renewables_share_pct_range" in result.output

    def test_init_db(self, tmp_path):
        uri = f"sqlite:///{tmp_path / 'energy.db'}"

        result = CliRunner().invoke(cli, ["init-db", "--db-uri", uri, "--log-level", "WARNING"])

        assert result.exit_code == 0, result.output
        assert "country_energy, regional_energy" in result.output
        engine = create_engine(uri)
        with engine.connect() as conn:
            assert engine.dialect.has_table(conn, "country_energy")
            assert engine.dialect.has_table(conn, "regional_energy")
        engine.dispose()

    def test_init_db_uses_configured_energy_database(self, tmp_path, monkeypatch):
        engine = create_engine(f"sqlite:///{tmp_path / 'configured.db'}")
        monkeypatch.setattr("energy_etl.cli.get_energy_engine", lambda: engine)

        result = CliRunner().invoke(cli, ["init-db", "--log-level", "WARNING"])

        assert result.exit_code == 0, result.output
        with engine.connect() as conn:
            assert engine.dialect.has_table(conn, "regional_energy")
        engine.dispose()

    def test_init_db_without_any_database(self, monkeypatch):
        def unconfigured():
            raise ValueError("Neither ENERGY_DB_URI nor SHOP_DB_URI is configured.")

        monkeypatch.setattr("energy_etl.cli.get_energy_engine", unconfigured)

        result = CliRunner().invoke(cli, ["init-db", "--log-level", "WARNING"])

        assert result.exit_code == 1
        assert "is configured" in result.output
