"""
Exception taxonomy for the index benchmark harness.

Only two conditions abort work: a uniqueness violation while generating
data, and a scenario query that fails to execute. Undefined ratios are
reported as values by the aggregator, not raised.
"""

from __future__ import annotations

from typing import Iterable, Optional


class BenchmarkError(Exception):
    """Base class for all harness errors."""


class UniquenessViolation(BenchmarkError):
    """
    A generated unique value collided with an existing row.

    Raised when generating into variants that still hold rows from an
    earlier run. Callers are expected to reset the schema set and rerun.
    """

    def __init__(self, table: str, detail: Optional[str] = None) -> None:
        self.table = table
        self.detail = detail
        message = f"Uniqueness violation while inserting into '{table}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ScenarioExecutionError(BenchmarkError):
    """A scenario query failed against a specific variant; measurement is aborted."""

    def __init__(self, scenario: str, variant: str, cause: Optional[BaseException] = None) -> None:
        self.scenario = scenario
        self.variant = variant
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Scenario '{scenario}' failed on variant '{variant}'{reason}")


class StatisticsRefreshError(BenchmarkError):
    """ANALYZE failed for a variant, typically because its table was never created."""

    def __init__(self, variant: str, cause: Optional[BaseException] = None) -> None:
        self.variant = variant
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not refresh statistics for variant '{variant}'{reason}")


class UnknownSchemaSetError(BenchmarkError, ValueError):
    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        super().__init__(f"Unknown schema set '{name}'. Available: {', '.join(available)}")


class UnknownScenarioError(BenchmarkError, ValueError):
    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        super().__init__(f"Unknown scenario '{name}'. Available: {', '.join(available)}")


__all__ = [
    "BenchmarkError",
    "UniquenessViolation",
    "ScenarioExecutionError",
    "StatisticsRefreshError",
    "UnknownSchemaSetError",
    "UnknownScenarioError",
]
