"""
Orchestrator: the generate / measure / run_all entry points.

Usage (example from CLI):
    from index_bench.orchestrator import run_all

    report = run_all(10_000, schema_set="design_comparison", persist=True)

Each entry point accepts an already-open QueryEngine; when omitted, a
PostgresEngine is opened from settings and closed when the call returns.

With ``persist=True`` outputs are saved to `results/`:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, Optional

from index_bench.aggregator import build_report
from index_bench.config import get_settings
from index_bench.domain.models import GenerationSummary
from index_bench.domain.report import BenchmarkReport
from index_bench.generator.data_generator import DataGenerator
from index_bench.harness import MeasurementHarness
from index_bench.infrastructure.abstract import QueryEngine
from index_bench.infrastructure.postgres import PostgresEngine
from index_bench.schemas.definitions import get_schema_set
from index_bench.schemas.manager import SchemaSetManager
from index_bench.utils.logging import get_logger

log = get_logger(__name__)


@contextmanager
def _engine_scope(engine: Optional[QueryEngine]) -> Generator[QueryEngine, None, None]:
    if engine is not None:
        yield engine
        return
    owned = PostgresEngine.connect()
    try:
        yield owned
    finally:
        owned.close()


def _persist_results(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True, default=str)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def generate(
    record_count: int,
    schema_set: Optional[str] = None,
    *,
    engine: Optional[QueryEngine] = None,
    reset: bool = True,
    seed: Optional[int] = None,
    batch_size: Optional[int] = None,
) -> GenerationSummary:
    """
    Populate every variant of a schema set with ``record_count`` identical records.

    Parameters
    ----------
    record_count : int
        Records to generate (0 leaves the variants empty).
    schema_set : str | None
        Schema set name. Defaults to settings.bench_suite.
    reset : bool
        Drop and recreate the variants first. With ``reset=False`` the
        caller guarantees they are empty; colliding values raise
        UniquenessViolation.
    seed : int | None
        RNG seed. Defaults to settings.bench_seed.
    batch_size : int | None
        Records per insert batch. Defaults to settings.bench_batch_size.
    """
    settings = get_settings()
    suite = get_schema_set(schema_set or settings.bench_suite)
    effective_seed = seed if seed is not None else settings.bench_seed

    log.info(
        f"[GENERATE START] {suite.name}",
        extra={"schema_set": suite.name, "records": record_count, "reset": reset},
    )
    with _engine_scope(engine) as active:
        if reset:
            SchemaSetManager(active, suite).create_all()
        generator = DataGenerator(seed=effective_seed)
        summary = generator.populate(
            active,
            suite.variants,
            record_count,
            batch_size=batch_size or settings.bench_batch_size,
            schema_set=suite.name,
        )
    log.info(
        f"[GENERATE COMPLETE] {suite.name}",
        extra={
            "schema_set": suite.name,
            "records": summary.records,
            "throughput_rps": summary.throughput_records_per_sec,
        },
    )
    return summary


def measure(
    schema_set: Optional[str] = None,
    *,
    engine: Optional[QueryEngine] = None,
    run: int = 1,
) -> BenchmarkReport:
    """
    Run the scenario battery once against a populated schema set and report.

    Measuring variants that were never populated is not detected: every
    scenario reports zero rows.

    Raises
    ------
    ScenarioExecutionError
        If a scenario fails to execute on some variant.
    """
    settings = get_settings()
    suite = get_schema_set(schema_set or settings.bench_suite)

    with _engine_scope(engine) as active:
        measurements = MeasurementHarness(active).measure(suite.variants, run=run)

    report = build_report(measurements, suite)
    log.info(
        f"[MEASURE COMPLETE] {suite.name}",
        extra={"schema_set": suite.name, "measurements": len(measurements)},
    )
    return report


def run_all(
    record_count: int,
    schema_set: Optional[str] = None,
    *,
    engine: Optional[QueryEngine] = None,
    seed: Optional[int] = None,
    drop_after: bool = False,
    persist: bool = False,
    results_dir: Path | str = "results",
) -> BenchmarkReport:
    """
    Reset, generate, and measure a schema set in one sequence.

    Parameters
    ----------
    record_count : int
        Records to generate per variant.
    schema_set : str | None
        Schema set name. Defaults to settings.bench_suite.
    seed : int | None
        RNG seed for generation.
    drop_after : bool
        Drop the variants once measured.
    persist : bool
        Write the generation summary and report to JSON under ``results_dir``.
    """
    settings = get_settings()
    suite = get_schema_set(schema_set or settings.bench_suite)

    with _engine_scope(engine) as active:
        summary = generate(record_count, suite.name, engine=active, reset=True, seed=seed)
        report = measure(suite.name, engine=active)
        if drop_after:
            SchemaSetManager(active, suite).drop_all()

    if persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "schema_set": suite.name,
            "generation": summary.model_dump(mode="json"),
            "report": report.model_dump(mode="json"),
        }
        _persist_results(payload, Path(results_dir))

    log.info(
        f"[RUN COMPLETE] {suite.name}: {len(report.scenarios)} scenarios measured",
        extra={"schema_set": suite.name, "records": summary.records},
    )
    return report


def drop(schema_set: Optional[str] = None, *, engine: Optional[QueryEngine] = None) -> None:
    """Drop every variant of a schema set."""
    settings = get_settings()
    suite = get_schema_set(schema_set or settings.bench_suite)
    with _engine_scope(engine) as active:
        SchemaSetManager(active, suite).drop_all()


__all__ = ["generate", "measure", "run_all", "drop"]
