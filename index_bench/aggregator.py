"""
Aggregator: turns measurements into a ranked, read-only comparison.

Measurements are grouped by (scenario, run) and ranked by ascending elapsed
time. Each entry after the fastest carries its ratio to the next-faster
entry (slower / faster). When the schema set names a (good, bad) pair, each
scenario also carries the direct degradation ratio (bad / good).

A ratio with a zero (or negative) reading on either side is undefined; it
is reported as such, never computed as infinity or raised.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from index_bench.domain.models import MeasurementRecord
from index_bench.domain.report import BenchmarkReport, RankedMeasurement, Ratio, ScenarioReport
from index_bench.schemas.definitions import SchemaSet


def compute_ratio(numerator_us: int, denominator_us: int, decimals: int = 2) -> Ratio:
    if numerator_us <= 0 or denominator_us <= 0:
        return Ratio(numerator_us=numerator_us, denominator_us=denominator_us)
    return Ratio(
        numerator_us=numerator_us,
        denominator_us=denominator_us,
        value=round(numerator_us / denominator_us, decimals),
    )


def _rank(measurements: List[MeasurementRecord]) -> Tuple[RankedMeasurement, ...]:
    ordered = sorted(measurements, key=lambda m: (m.elapsed_us, m.variant))
    ranked: List[RankedMeasurement] = []
    previous: Optional[MeasurementRecord] = None
    for position, current in enumerate(ordered, start=1):
        ratio = None
        if previous is not None:
            ratio = compute_ratio(current.elapsed_us, previous.elapsed_us)
        ranked.append(
            RankedMeasurement(
                rank=position,
                variant=current.variant,
                label=current.label,
                elapsed_us=current.elapsed_us,
                elapsed_ms=current.elapsed_ms,
                rows_examined=current.rows_examined,
                ratio_to_previous=ratio,
            )
        )
        previous = current
    return tuple(ranked)


def _degradation(
    measurements: List[MeasurementRecord], pair: Optional[Tuple[str, str]]
) -> Optional[Ratio]:
    if pair is None:
        return None
    by_variant = {m.variant: m for m in measurements}
    good, bad = pair
    if good not in by_variant or bad not in by_variant:
        return None
    return compute_ratio(by_variant[bad].elapsed_us, by_variant[good].elapsed_us)


def build_report(
    measurements: Iterable[MeasurementRecord], schema_set: Optional[SchemaSet] = None
) -> BenchmarkReport:
    """
    Build the ranked report for one invocation's measurements.

    The output depends only on the set of measurements, not their order:
    sections are sorted by (scenario, run) and entries by
    (elapsed_us, variant).
    """
    groups: Dict[Tuple[str, int], List[MeasurementRecord]] = defaultdict(list)
    for measurement in measurements:
        groups[(measurement.scenario, measurement.run)].append(measurement)

    pair = schema_set.degradation_pair if schema_set is not None else None
    sections = tuple(
        ScenarioReport(
            scenario=scenario,
            run=run,
            entries=_rank(groups[(scenario, run)]),
            degradation=_degradation(groups[(scenario, run)], pair),
        )
        for scenario, run in sorted(groups)
    )
    return BenchmarkReport(
        schema_set=schema_set.name if schema_set is not None else None,
        degradation_pair=pair,
        scenarios=sections,
    )


__all__ = ["compute_ratio", "build_report"]
