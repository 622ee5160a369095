"""
Schema Set Manager: owns the lifecycle of a suite's variant tables.

The generator and harness only read and write rows; creating and dropping
the tables happens here.
"""

from __future__ import annotations

from typing import Dict, Tuple

from index_bench.infrastructure.abstract import QueryEngine
from index_bench.schemas.definitions import SchemaSet, SchemaVariant
from index_bench.utils.logging import get_logger

log = get_logger(__name__)


class SchemaSetManager:
    def __init__(self, engine: QueryEngine, schema_set: SchemaSet) -> None:
        self.engine = engine
        self.schema_set = schema_set

    @property
    def variants(self) -> Tuple[SchemaVariant, ...]:
        return self.schema_set.variants

    def create_all(self) -> None:
        """Drop and recreate every variant of the schema set."""
        for variant in self.variants:
            self.engine.create_variant(variant)
            log.info(
                f"[SCHEMA] Created {variant.name} ({len(variant.indexes)} indexes)",
                extra={"schema_set": self.schema_set.name, "variant": variant.name},
            )

    def drop_all(self) -> None:
        for variant in self.variants:
            self.engine.drop_variant(variant)
            log.info(
                f"[SCHEMA] Dropped {variant.name}",
                extra={"schema_set": self.schema_set.name, "variant": variant.name},
            )

    def row_counts(self) -> Dict[str, int]:
        return {variant.name: self.engine.row_count(variant) for variant in self.variants}


__all__ = ["SchemaSetManager"]
