"""Column contracts of the datasets flowing through the energy ETL."""

from typing import Literal

from pydantic import BaseModel, Field

ColumnKind = Literal["string", "integer", "float"]
Severity = Literal["error", "warn"]


class ColumnSpec(BaseModel):
    name: str
    kind: ColumnKind
    nullable: bool = True
    min: float | None = None
    max: float | None = None


class DatasetContract(BaseModel):
    name: str
    columns: list[ColumnSpec]
    key: list[str] = Field(default_factory=list)
    # Raw sources may repeat a key; clean_country_frame keeps the last row.
    key_severity: Severity = "error"

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]


YEAR = ColumnSpec(name="year", kind="integer", nullable=False, min=1800, max=2100)
COUNTRY = ColumnSpec(name="country", kind="string", nullable=False)
# Aggregate rows such as "Europe" have no ISO code.
RAW_ISO_CODE = ColumnSpec(name="iso_code", kind="string")

POPULATION = DatasetContract(
    name="population",
    columns=[
        COUNTRY,
        RAW_ISO_CODE,
        YEAR,
        ColumnSpec(name="population", kind="integer", nullable=False, min=0),
    ],
    key=["iso_code", "year"],
    key_severity="warn",
)

ENERGY_CONSUMPTION = DatasetContract(
    name="energy_consumption",
    columns=[
        COUNTRY,
        RAW_ISO_CODE,
        YEAR,
        ColumnSpec(name="primary_energy_twh", kind="float", nullable=False, min=0),
    ],
    key=["iso_code", "year"],
    key_severity="warn",
)

RENEWABLE_SHARE = DatasetContract(
    name="renewable_share",
    columns=[
        COUNTRY,
        RAW_ISO_CODE,
        YEAR,
        ColumnSpec(name="renewables_share_pct", kind="float", min=0, max=100),
    ],
    key=["iso_code", "year"],
    key_severity="warn",
)

REGION_TAXONOMY = DatasetContract(
    name="region_taxonomy",
    columns=[
        ColumnSpec(name="iso_code", kind="string", nullable=False),
        COUNTRY,
        ColumnSpec(name="region", kind="string", nullable=False),
        ColumnSpec(name="subregion", kind="string"),
    ],
    key=["iso_code"],
)

COUNTRY_ENERGY = DatasetContract(
    name="country_energy",
    columns=[
        ColumnSpec(name="iso_code", kind="string", nullable=False),
        COUNTRY,
        YEAR,
        ColumnSpec(name="region", kind="string", nullable=False),
        ColumnSpec(name="subregion", kind="string"),
        ColumnSpec(name="population", kind="integer", nullable=False, min=0),
        ColumnSpec(name="primary_energy_twh", kind="float", nullable=False, min=0),
        ColumnSpec(name="renewables_share_pct", kind="float", min=0, max=100),
        ColumnSpec(name="renewable_energy_twh", kind="float", min=0),
        ColumnSpec(name="energy_per_capita_kwh", kind="float", min=0),
    ],
    key=["iso_code", "year"],
)

REGIONAL_ENERGY = DatasetContract(
    name="regional_energy",
    columns=[
        ColumnSpec(name="region", kind="string", nullable=False),
        YEAR,
        ColumnSpec(name="country_count", kind="integer", nullable=False, min=1),
        ColumnSpec(name="population", kind="integer", nullable=False, min=0),
        ColumnSpec(name="primary_energy_twh", kind="float", nullable=False, min=0),
        ColumnSpec(name="renewable_energy_twh", kind="float", nullable=False, min=0),
        ColumnSpec(name="renewables_share_pct", kind="float", min=0, max=100),
        ColumnSpec(name="energy_per_capita_kwh", kind="float", min=0),
    ],
    key=["region", "year"],
)

RAW_CONTRACTS: dict[str, DatasetContract] = {
    contract.name: contract
    for contract in (POPULATION, ENERGY_CONSUMPTION, RENEWABLE_SHARE, REGION_TAXONOMY)
}
