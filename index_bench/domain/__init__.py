"""
Domain package for the index benchmark harness.

Exports the synthetic record, measurement, and report models shared by the
generator, harness, aggregator, and reporter.
"""

from index_bench.domain.models import (
    SESSION_COLUMNS,
    GenerationSummary,
    MeasurementRecord,
    SessionRecord,
)
from index_bench.domain.report import BenchmarkReport, RankedMeasurement, Ratio, ScenarioReport

__all__ = [
    "SESSION_COLUMNS",
    "SessionRecord",
    "MeasurementRecord",
    "GenerationSummary",
    "Ratio",
    "RankedMeasurement",
    "ScenarioReport",
    "BenchmarkReport",
]
