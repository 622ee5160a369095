"""
Utilities package for the index benchmark harness.

Exports shared helpers for logging, profiling and query timing.
Keep this package lightweight and free of domain-specific logic.
"""

from index_bench.utils.logging import configure_logging, get_logger
from index_bench.utils.profiler import ProfileStats, TimedResult, profile_block, time_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "TimedResult",
    "profile_block",
    "time_operation",
]
