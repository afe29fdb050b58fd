import logging
import time
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class CodeTimer:
    """Measure the duration of named steps."""

    def __init__(self, name="Code Execution", logger: logging.Logger = logger):
        self.name = name
        self.logger = logger
        self.steps: dict[str, float] = {}

    @contextmanager
    def step(self, step_name: str):
        step_start = time.perf_counter()
        self.logger.info(f"Start: {step_name}")
        try:
            yield
        finally:
            step_duration = time.perf_counter() - step_start
            self.steps[step_name] = step_duration
            self.logger.info(f"End: {step_name} ({step_duration:.2f}s)")

    @property
    def total(self) -> float:
        return sum(self.steps.values())

    def summary(self) -> dict[str, float]:
        return {**{k: round(v, 3) for k, v in self.steps.items()}, "total": round(self.total, 3)}
