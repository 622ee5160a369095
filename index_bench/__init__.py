"""
index-bench - Benchmarking harness for PostgreSQL index designs.

Fills parallel table variants (same columns, different indexes) with
identical, realistically skewed session data and times a fixed battery of
queries against each variant:

- Point lookups by unique token
- Equality on a skewed column combined with a boolean flag
- One-sided and bounded range scans on timestamps
- Multi-predicate range + flag filters
- Prefix pattern matches

Results are ranked per scenario with slower/faster ratios, plus a direct
degradation ratio for suites that pair a good and a bad index design.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from index_bench.aggregator import build_report, compute_ratio
from index_bench.config import Settings, get_settings
from index_bench.domain import (
    BenchmarkReport,
    GenerationSummary,
    MeasurementRecord,
    Ratio,
    SessionRecord,
)
from index_bench.errors import (
    BenchmarkError,
    ScenarioExecutionError,
    StatisticsRefreshError,
    UniquenessViolation,
)
from index_bench.generator import DataGenerator
from index_bench.harness import MeasurementHarness
from index_bench.infrastructure import PostgresEngine, QueryEngine
from index_bench.orchestrator import generate, measure, run_all
from index_bench.scenarios import BATTERY, Scenario
from index_bench.schemas import SchemaSet, SchemaSetManager, SchemaVariant, get_schema_set
from index_bench.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Entry points
    "generate",
    "measure",
    "run_all",
    # Components
    "DataGenerator",
    "MeasurementHarness",
    "SchemaSetManager",
    "build_report",
    "compute_ratio",
    # Fixtures
    "BATTERY",
    "Scenario",
    "SchemaSet",
    "SchemaVariant",
    "get_schema_set",
    # Engines
    "QueryEngine",
    "PostgresEngine",
    # Models
    "SessionRecord",
    "MeasurementRecord",
    "GenerationSummary",
    "BenchmarkReport",
    "Ratio",
    # Errors
    "BenchmarkError",
    "UniquenessViolation",
    "ScenarioExecutionError",
    # Logging
    "configure_logging",
    "get_logger",
]
