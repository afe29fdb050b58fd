import logging

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOGGER = logging.getLogger(__name__)
load_dotenv()

LOCAL_HOSTS = ("localhost", "127.0.0.1")


def _build_ssl_params_psycopg2(host: str) -> str:
    if host in LOCAL_HOSTS:
        LOGGER.warning("SSL is disabled for localhost")
        return ""

    return "?sslmode=verify-full"


def _build_ssl_params_asyncpg(host: str) -> str:
    # https://magicstack.github.io/asyncpg/current/api/index.html#connection
    if host in LOCAL_HOSTS:
        LOGGER.warning("SSL is disabled for localhost")
        return ""
    return "?ssl=verify-full"


class Settings(BaseSettings):
    """
    Centralized database configuration.

    The shop database backs both the synchronous services and the async API.
    The energy database receives the ETL output; when it is not configured the
    ETL writes to the shop database.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    WEB_CONCURRENCY: int = 4
    DB_POOL_SIZE: int = 20
    # Per worker, never below 5
    POOL_SIZE: int | None = Field(default=None, validate_default=True)
    DB_ECHO: bool = False

    # Shop database
    SHOP_DB_USER: str = "shop"
    SHOP_DB_PASSWORD: str = "shop"
    SHOP_DB_HOST: str = "localhost"
    SHOP_DB_PORT: int = 5432
    SHOP_DB_NAME: str = "shop"

    # Energy database (optional)
    ENERGY_DB_USER: str = ""
    ENERGY_DB_PASSWORD: str = ""
    ENERGY_DB_HOST: str = ""
    ENERGY_DB_PORT: int = 5432
    ENERGY_DB_NAME: str = ""

    # Connection URIs, built from the parts above unless set explicitly
    ASYNC_SHOP_DB_URI: str | None = Field(default=None, validate_default=True)
    SHOP_DB_URI: str | None = Field(default=None, validate_default=True)
    ENERGY_DB_URI: str | None = Field(default=None, validate_default=True)

    @field_validator("POOL_SIZE", mode="before")
    @classmethod
    def assemble_pool_size(cls, v: int | None, info) -> int:
        if v is not None:
            return v
        values = info.data
        return max(values.get("DB_POOL_SIZE", 20) // max(values.get("WEB_CONCURRENCY", 4), 1), 5)

    @field_validator("ASYNC_SHOP_DB_URI", mode="before")
    @classmethod
    def assemble_async_shop_db_uri(cls, v: str | None, info) -> str:
        """Build async shop database URI with SSL for remote connections."""
        if isinstance(v, str):
            return v
        values = info.data
        host = values.get("SHOP_DB_HOST")
        ssl_params = _build_ssl_params_asyncpg(host)
        return (
            f"postgresql+asyncpg://{values.get('SHOP_DB_USER')}:{values.get('SHOP_DB_PASSWORD')}"
            f"@{host}:{values.get('SHOP_DB_PORT')}/{values.get('SHOP_DB_NAME')}{ssl_params}"
        )

    @field_validator("SHOP_DB_URI", mode="before")
    @classmethod
    def assemble_sync_shop_db_uri(cls, v: str | None, info) -> str:
        """Build sync shop database URI with SSL for remote connections."""
        if isinstance(v, str):
            return v
        values = info.data
        host = values.get("SHOP_DB_HOST")
        ssl_params = _build_ssl_params_psycopg2(host)
        return (
            f"postgresql+psycopg2://{values.get('SHOP_DB_USER')}:{values.get('SHOP_DB_PASSWORD')}"
            f"@{host}:{values.get('SHOP_DB_PORT')}/{values.get('SHOP_DB_NAME')}{ssl_params}"
        )

    @field_validator("ENERGY_DB_URI", mode="before")
    @classmethod
    def assemble_energy_db_uri(cls, v: str | None, info) -> str:
        """Build energy database URI with SSL for remote connections."""
        if isinstance(v, str):
            return v
        values = info.data
        user = values.get("ENERGY_DB_USER")
        password = values.get("ENERGY_DB_PASSWORD")
        host = values.get("ENERGY_DB_HOST")
        port = values.get("ENERGY_DB_PORT")
        db_name = values.get("ENERGY_DB_NAME")
        if not all([user, password, host, db_name]):
            return ""
        ssl_params = _build_ssl_params_psycopg2(host)
        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db_name}{ssl_params}"


db_settings = Settings()
