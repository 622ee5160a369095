"""
Profiling and timing utilities for the index benchmark harness.

Two tools live here:

- ``profile_block``: a context manager for coarse phases (data generation)
  measuring wall-clock duration, peak RSS via a background sampling thread,
  and CPU percent through psutil.
- ``time_operation``: the scoped timer used for every measured query. It
  captures a start timestamp, runs the operation, captures an end timestamp,
  and returns the result with the elapsed integer microseconds. No timing
  state outlives the call.

Usage examples:
    from index_bench.utils.profiler import profile_block, time_operation

    with profile_block("generate") as stats:
        populate()
    print(stats.duration_seconds, stats.peak_rss_bytes)

    timed = time_operation(engine.count_matching, variant, scenario)
    print(timed.value, timed.elapsed_us)
"""

from __future__ import annotations

import contextlib
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Generic, Optional, TypeVar

import psutil

T = TypeVar("T")


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)


@dataclass(frozen=True)
class TimedResult(Generic[T]):
    value: T
    elapsed_us: int


@contextlib.contextmanager
def profile_block(label: str, sample_interval_ms: int = 50) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    sample_interval_ms : int
        Interval in milliseconds for RSS sampling. Lower = more accurate but higher overhead.

    Notes
    -----
    Peak RSS is sampled by a daemon thread for the duration of the block so
    bursty allocations are caught, not just start/end snapshots.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    peak_rss = process.memory_info().rss
    stop_sampling = threading.Event()

    def _sample_memory() -> None:
        nonlocal peak_rss
        while not stop_sampling.is_set():
            try:
                peak_rss = max(peak_rss, process.memory_info().rss)
            except psutil.Error:
                return
            stop_sampling.wait(timeout=sample_interval_ms / 1000.0)

    # CPU percent needs a priming call
    process.cpu_percent(interval=None)

    sampler = threading.Thread(target=_sample_memory, daemon=True)
    sampler.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts

        stop_sampling.set()
        sampler.join(timeout=1.0)

        stats.peak_rss_bytes = peak_rss if peak_rss > 0 else None
        stats.cpu_percent = process.cpu_percent(interval=None)


def time_operation(operation: Callable[..., T], *args: Any, **kwargs: Any) -> TimedResult[T]:
    """
    Run ``operation`` once and return its result with the elapsed microseconds.

    Uses ``time.perf_counter_ns`` (monotonic), so the reading is never
    negative; a zero reading is possible on very fast operations and is
    returned as-is.
    """
    start_ns = time.perf_counter_ns()
    value = operation(*args, **kwargs)
    end_ns = time.perf_counter_ns()
    return TimedResult(value=value, elapsed_us=max(0, (end_ns - start_ns) // 1000))


__all__ = ["ProfileStats", "TimedResult", "profile_block", "time_operation"]
