class EnergyEtlError(Exception):
    """Base class for energy ETL failures."""


class ExtractError(EnergyEtlError):
    def __init__(self, dataset: str, location: str, cause: Exception):
        self.dataset = dataset
        self.location = str(location)
        self.cause = cause
        super().__init__(f"Could not read {dataset} from {self.location}: {cause}")


class DataValidationError(EnergyEtlError):
    """Raised when at least one error-severity check failed."""

    def __init__(self, outcomes: list):
        self.outcomes = outcomes
        details = "; ".join(
            f"{outcome.name} ({outcome.failed_rows} rows): {outcome.description}"
            for outcome in outcomes
        )
        super().__init__(f"{len(outcomes)} blocking check(s) failed: {details}")
