"""
Measurement harness: times every scenario against every schema variant.

Protocol for one invocation, strictly in order:

1. invalidate the engine's query/plan cache once;
2. refresh optimizer statistics for every variant about to be queried;
3. for each scenario, for each variant, time one COUNT(*) execution with
   caching bypassed and record elapsed microseconds and the count.

Executions are sequential on a single connection; timed queries never
overlap. A single trial per (scenario, variant) is the unit of measurement.
"""

from __future__ import annotations

from typing import List, Sequence

from index_bench.domain.models import MeasurementRecord
from index_bench.errors import ScenarioExecutionError, StatisticsRefreshError
from index_bench.infrastructure.abstract import QueryEngine
from index_bench.scenarios import BATTERY, Scenario
from index_bench.schemas.definitions import SchemaVariant
from index_bench.utils.logging import get_logger
from index_bench.utils.profiler import time_operation

log = get_logger(__name__)


class MeasurementHarness:
    def __init__(self, engine: QueryEngine, scenarios: Sequence[Scenario] = BATTERY) -> None:
        self.engine = engine
        self.scenarios = tuple(scenarios)

    def prepare(self, variants: Sequence[SchemaVariant]) -> None:
        """Invalidate cached state, then refresh statistics for every variant."""
        self.engine.invalidate_cache()
        for variant in variants:
            try:
                self.engine.refresh_statistics(variant)
            except Exception as exc:
                log.exception(
                    f"[ANALYZE FAILED] {variant.name}", extra={"variant": variant.name}
                )
                raise StatisticsRefreshError(variant.name, exc) from exc

    def measure_one(
        self, scenario: Scenario, variant: SchemaVariant, run: int = 1
    ) -> MeasurementRecord:
        try:
            timed = time_operation(self.engine.count_matching, variant, scenario)
        except Exception as exc:
            log.exception(
                f"[SCENARIO FAILED] {scenario.name} on {variant.name}",
                extra={"scenario": scenario.name, "variant": variant.name},
            )
            raise ScenarioExecutionError(scenario.name, variant.name, exc) from exc

        return MeasurementRecord(
            scenario=scenario.name,
            variant=variant.name,
            label=variant.label,
            run=run,
            elapsed_us=timed.elapsed_us,
            rows_examined=timed.value,
        )

    def measure(self, variants: Sequence[SchemaVariant], run: int = 1) -> List[MeasurementRecord]:
        """
        Execute the battery once against ``variants``.

        Returns
        -------
        list[MeasurementRecord]
            One record per (scenario, variant), scenario-major, in battery
            and variant order.

        Raises
        ------
        StatisticsRefreshError
            If ANALYZE fails on a variant; no scenario is executed.
        ScenarioExecutionError
            If any scenario fails; the remaining battery is not executed.
        """
        variants = tuple(variants)
        log.info(
            f"[MEASURE] {len(self.scenarios)} scenarios x {len(variants)} variants (run {run})",
            extra={"scenarios": len(self.scenarios), "variants": len(variants), "run": run},
        )
        self.prepare(variants)

        measurements: List[MeasurementRecord] = []
        for scenario in self.scenarios:
            for variant in variants:
                record = self.measure_one(scenario, variant, run=run)
                measurements.append(record)
                log.info(
                    f"[MEASURE] {scenario.name} | {variant.name} | "
                    f"{record.elapsed_us} us | rows={record.rows_examined}",
                    extra={
                        "scenario": scenario.name,
                        "variant": variant.name,
                        "elapsed_us": record.elapsed_us,
                        "rows_examined": record.rows_examined,
                    },
                )
        return measurements


__all__ = ["MeasurementHarness"]
