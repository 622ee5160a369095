"""
Report models produced by the aggregator.

A report is an ordered, read-only view over measurements: one section per
(scenario, run), its variants ranked fastest first, each carrying the
ratio to its faster neighbour.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, Field


class Ratio(BaseModel):
    """
    Relative cost `numerator_us / denominator_us`.

    `value` is None when either side is not a positive reading; such a
    ratio is undefined rather than infinite.
    """

    numerator_us: int
    denominator_us: int
    value: Optional[float] = None

    model_config = {"frozen": True}

    @property
    def undefined(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return "undefined" if self.value is None else f"{self.value:.2f}"


class RankedMeasurement(BaseModel):
    rank: int = Field(..., ge=1)
    variant: str
    label: str = ""
    elapsed_us: int
    elapsed_ms: Decimal
    rows_examined: int
    ratio_to_previous: Optional[Ratio] = None

    model_config = {"frozen": True}


class ScenarioReport(BaseModel):
    scenario: str
    run: int = 1
    entries: Tuple[RankedMeasurement, ...]
    degradation: Optional[Ratio] = None

    model_config = {"frozen": True}

    @property
    def fastest(self) -> Optional[RankedMeasurement]:
        return self.entries[0] if self.entries else None

    def entry(self, variant: str) -> Optional[RankedMeasurement]:
        for item in self.entries:
            if item.variant == variant:
                return item
        return None


class BenchmarkReport(BaseModel):
    schema_set: Optional[str] = None
    degradation_pair: Optional[Tuple[str, str]] = None
    scenarios: Tuple[ScenarioReport, ...] = ()

    model_config = {"frozen": True}

    def scenario(self, name: str, run: int = 1) -> Optional[ScenarioReport]:
        for section in self.scenarios:
            if section.scenario == name and section.run == run:
                return section
        return None


__all__ = ["Ratio", "RankedMeasurement", "ScenarioReport", "BenchmarkReport"]
