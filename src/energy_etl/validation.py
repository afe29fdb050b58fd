"""
Contract validation of extracted frames and quality checks of the
transformed country and regional tables.

Every check returns a `CheckOutcome`; only `assert_valid` raises.
"""

import logging
from logging import Logger
from typing import Any

import numpy as np
import pandas as pd
from pandas import DataFrame as DF
from pydantic import BaseModel, Field

from core.pandas_utils import sample_records
from energy_etl.contracts import DatasetContract, Severity
from energy_etl.errors import DataValidationError

LOGGER = logging.getLogger(__name__)

SAMPLE_SIZE = 5


class CheckOutcome(BaseModel):
    name: str
    passed: bool
    severity: Severity = "error"
    failed_rows: int = 0
    description: str = ""
    sample: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def blocking(self) -> bool:
        return not self.passed and self.severity == "error"


def _outcome(name: str, failing: DF, severity: Severity, description: str) -> CheckOutcome:
    return CheckOutcome(
        name=name,
        passed=failing.empty,
        severity=severity,
        failed_rows=len(failing),
        description=description,
        sample=sample_records(failing, SAMPLE_SIZE),
    )


def _non_coercible_mask(s: pd.Series, kind: str) -> pd.Series:
    if kind == "string":
        return pd.Series(False, index=s.index)
    numeric = pd.to_numeric(s, errors="coerce")
    mask = s.notna() & numeric.isna()
    if kind == "integer":
        finite = numeric.notna() & np.isfinite(numeric.astype(float))
        mask |= finite & (numeric.astype(float) % 1 != 0)
    return mask


def validate_frame(df: DF, contract: DatasetContract) -> list[CheckOutcome]:
    """Check `df` against `contract`, one outcome per rule and column."""
    outcomes = []
    missing = [col for col in contract.column_names if col not in df.columns]
    outcomes.append(
        CheckOutcome(
            name="required_columns",
            passed=not missing,
            failed_rows=0 if not missing else len(df),
            description=(
                f"{contract.name} has all of {contract.column_names}"
                if not missing
                else f"{contract.name} is missing columns {missing}"
            ),
        )
    )

    for column in contract.columns:
        if column.name in missing:
            continue
        values = df[column.name]
        if not column.nullable:
            outcomes.append(
                _outcome(
                    f"{column.name}_not_null",
                    df[values.isna()],
                    "error",
                    f"{column.name} must not be null",
                )
            )
        outcomes.append(
            _outcome(
                f"{column.name}_dtype",
                df[_non_coercible_mask(values, column.kind)],
                "error",
                f"{column.name} must be coercible to {column.kind}",
            )
        )
        if column.min is not None or column.max is not None:
            numeric = pd.to_numeric(values, errors="coerce").astype(float)
            out_of_range = pd.Series(False, index=df.index)
            if column.min is not None:
                out_of_range |= numeric < column.min
            if column.max is not None:
                out_of_range |= numeric > column.max
            outcomes.append(
                _outcome(
                    f"{column.name}_range",
                    df[out_of_range],
                    "error",
                    f"{column.name} must lie within [{column.min}, {column.max}]",
                )
            )

    key = [col for col in contract.key if col not in missing]
    if key and len(key) == len(contract.key):
        outcomes.append(
            _outcome(
                "unique_key",
                df[df.duplicated(subset=key, keep=False)],
                contract.key_severity,
                f"{contract.name} rows must be unique on {key}",
            )
        )
    return outcomes


def assert_valid(outcomes: list[CheckOutcome], logger: Logger = LOGGER) -> list[CheckOutcome]:
    """
    Raise `DataValidationError` listing every failed error-severity outcome.
    Failed warnings are logged and let through.
    """
    for outcome in outcomes:
        if not outcome.passed and outcome.severity == "warn":
            logger.warning(
                f"Check {outcome.name} failed on {outcome.failed_rows} rows: {outcome.description}"
            )
    blocking = [outcome for outcome in outcomes if outcome.blocking]
    if blocking:
        raise DataValidationError(blocking)
    return outcomes


def check_unmapped_countries(country_df: DF, taxonomy: DF) -> CheckOutcome:
    """Countries with data but no region in the taxonomy."""
    mapped = set(taxonomy["iso_code"].dropna().astype(str).str.strip().str.upper())
    countries = country_df[["iso_code", "country"]].drop_duplicates("iso_code")
    unmapped = countries[~countries["iso_code"].astype(str).isin(mapped)]
    return _outcome(
        "unmapped_countries",
        unmapped.sort_values("iso_code"),
        "warn",
        "every country with data should have a region",
    )


def check_regional_totals_reconcile(
    country_df: DF, regional_df: DF, rtol: float = 1e-6
) -> CheckOutcome:
    """Per region and year, country sums must match the regional table."""
    measures = ["population", "primary_energy_twh", "renewable_energy_twh"]
    expected = (
        country_df.assign(renewable_energy_twh=country_df["renewable_energy_twh"].fillna(0.0))
        .groupby(["region", "year"], as_index=False)[measures]
        .sum()
    )
    merged = expected.merge(
        regional_df[["region", "year", *measures]],
        on=["region", "year"],
        how="outer",
        suffixes=("_expected", "_actual"),
        indicator=True,
    )
    mismatch = merged["_merge"] != "both"
    for measure in measures:
        expected_values = merged[f"{measure}_expected"].astype(float)
        actual_values = merged[f"{measure}_actual"].astype(float)
        mismatch |= ~np.isclose(expected_values, actual_values, rtol=rtol, atol=0.0)
    failing = merged[mismatch].drop(columns="_merge")
    return _outcome(
        "regional_totals_reconcile",
        failing,
        "error",
        f"regional sums of {measures} must match country sums (rtol={rtol})",
    )


def check_share_bounds(df: DF) -> CheckOutcome:
    share = df["renewables_share_pct"]
    failing = df[share.notna() & ((share < 0) | (share > 100))]
    return _outcome(
        "share_bounds", failing, "error", "renewables_share_pct must lie within [0, 100]"
    )


def check_year_coverage(df: DF, min_years: int) -> CheckOutcome:
    """Every region must cover at least `min_years` distinct years."""
    coverage = df.groupby("region", as_index=False)["year"].nunique()
    failing = coverage[coverage["year"] < min_years].rename(columns={"year": "years"})
    return _outcome(
        "year_coverage",
        failing,
        "warn",
        f"every region should cover at least {min_years} years",
    )


def check_renewables_not_exceeding_total(df: DF) -> CheckOutcome:
    renewable = df["renewable_energy_twh"].astype(float)
    primary = df["primary_energy_twh"].astype(float)
    exceeding = (renewable > primary) & ~np.isclose(renewable, primary)
    return _outcome(
        "renewables_not_exceeding_total",
        df[exceeding.fillna(False)],
        "error",
        "renewable_energy_twh must not exceed primary_energy_twh",
    )


def quality_checks(
    country_df: DF,
    regional_df: DF,
    taxonomy: DF,
    min_years: int,
    rtol: float = 1e-6,
) -> list[CheckOutcome]:
    return [
        check_unmapped_countries(country_df, taxonomy),
        check_share_bounds(country_df),
        check_renewables_not_exceeding_total(country_df),
        check_regional_totals_reconcile(country_df, regional_df, rtol=rtol),
        check_year_coverage(regional_df, min_years),
    ]
