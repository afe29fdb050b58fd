"""SQLAlchemy models for the energy database."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db_models.energy.base import EnergyBase


class CountryEnergy(EnergyBase):
    __tablename__ = "country_energy"

    iso_code: Mapped[str] = mapped_column(String(3), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, primary_key=True)
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    subregion: Mapped[str | None] = mapped_column(String(100))
    population: Mapped[int] = mapped_column(BigInteger, nullable=False)
    primary_energy_twh: Mapped[float] = mapped_column(Float, nullable=False)
    renewables_share_pct: Mapped[float | None] = mapped_column(Float)
    renewable_energy_twh: Mapped[float | None] = mapped_column(Float)
    energy_per_capita_kwh: Mapped[float | None] = mapped_column(Float)
    loaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class RegionalEnergy(EnergyBase):
    __tablename__ = "regional_energy"

    region: Mapped[str] = mapped_column(String(100), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, primary_key=True)
    country_count: Mapped[int] = mapped_column(Integer, nullable=False)
    population: Mapped[int] = mapped_column(BigInteger, nullable=False)
    primary_energy_twh: Mapped[float] = mapped_column(Float, nullable=False)
    renewable_energy_twh: Mapped[float] = mapped_column(Float, nullable=False)
    renewables_share_pct: Mapped[float | None] = mapped_column(Float)
    energy_per_capita_kwh: Mapped[float | None] = mapped_column(Float)
    loaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


__all__ = [
    "CountryEnergy",
    "RegionalEnergy",
]
