from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DATA_DIR = Path(__file__).parent / "data"


class EtlSettings(BaseSettings):
    """
    Energy ETL configuration, read from ENERGY_ETL_* environment variables.
    Sources default to the sample files shipped with the package.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENERGY_ETL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    POPULATION_SOURCE: str = str(DATA_DIR / "population.csv")
    ENERGY_CONSUMPTION_SOURCE: str = str(DATA_DIR / "energy_consumption.csv")
    RENEWABLE_SHARE_SOURCE: str = str(DATA_DIR / "renewable_share.csv")
    REGION_TAXONOMY_SOURCE: str = str(DATA_DIR / "region_taxonomy.csv")

    MIN_YEARS: int = 3
    RECONCILE_RTOL: float = 1e-6
    OUTPUT_DIR: str | None = None


etl_settings = EtlSettings()
