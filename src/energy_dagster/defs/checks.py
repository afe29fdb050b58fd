"""Asset checks on the transformed energy tables."""

import dagster as dg
from pandas import DataFrame as DF

from energy_dagster.defs.assets import country_energy, regional_energy
from energy_etl.config import etl_settings
from energy_etl.validation import (
    CheckOutcome,
    check_regional_totals_reconcile,
    check_renewables_not_exceeding_total,
    check_share_bounds,
    check_unmapped_countries,
    check_year_coverage,
)

SEVERITIES = {
    "error": dg.AssetCheckSeverity.ERROR,
    "warn": dg.AssetCheckSeverity.WARN,
}


def to_asset_check_result(outcome: CheckOutcome) -> dg.AssetCheckResult:
    return dg.AssetCheckResult(
        passed=outcome.passed,
        severity=SEVERITIES[outcome.severity],
        description=outcome.description,
        metadata={
            "failed_rows": dg.MetadataValue.int(outcome.failed_rows),
            "sample": dg.MetadataValue.json(outcome.sample),
        },
    )


@dg.asset_check(
    asset=country_energy,
    name="no_unmapped_countries",
    additional_ins={"region_taxonomy": dg.AssetIn("region_taxonomy")},
)
def country_energy_no_unmapped_countries(
    country_energy: DF, region_taxonomy: DF
) -> dg.AssetCheckResult:
    """Every country with data has a region."""
    return to_asset_check_result(check_unmapped_countries(country_energy, region_taxonomy))


@dg.asset_check(asset=country_energy, name="share_bounds", blocking=True)
def country_energy_share_bounds(country_energy: DF) -> dg.AssetCheckResult:
    return to_asset_check_result(check_share_bounds(country_energy))


@dg.asset_check(asset=country_energy, name="renewables_not_exceeding_total", blocking=True)
def country_energy_renewables_not_exceeding_total(country_energy: DF) -> dg.AssetCheckResult:
    return to_asset_check_result(check_renewables_not_exceeding_total(country_energy))


@dg.asset_check(
    asset=regional_energy,
    name="totals_reconcile",
    additional_ins={"country_energy": dg.AssetIn("country_energy")},
    blocking=True,
)
def regional_energy_totals_reconcile(
    regional_energy: DF, country_energy: DF
) -> dg.AssetCheckResult:
    """Regional sums match the country rows they were built from."""
    return to_asset_check_result(
        check_regional_totals_reconcile(
            country_energy, regional_energy, rtol=etl_settings.RECONCILE_RTOL
        )
    )


@dg.asset_check(asset=regional_energy, name="year_coverage")
def regional_energy_year_coverage(regional_energy: DF) -> dg.AssetCheckResult:
    return to_asset_check_result(check_year_coverage(regional_energy, etl_settings.MIN_YEARS))


ENERGY_ASSET_CHECKS = [
    country_energy_no_unmapped_countries,
    country_energy_share_bounds,
    country_energy_renewables_not_exceeding_total,
    regional_energy_totals_reconcile,
    regional_energy_year_coverage,
]
