"""
Engine interface consumed by the schema manager, generator, and harness.

The relational engine is treated as a black box. Anything that can create
and drop the variant tables, bulk-insert rows, invalidate cached plans or
results, refresh optimizer statistics, and run a scenario's COUNT(*) with
caching bypassed can stand in for PostgreSQL (tests use an in-memory one).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from index_bench.domain.models import SessionRecord
    from index_bench.scenarios import Scenario
    from index_bench.schemas.definitions import SchemaVariant


@runtime_checkable
class QueryEngine(Protocol):
    """
    Synchronous operations the harness needs from a relational store.

    Every call blocks until the engine has finished; implementations must not
    run two statements concurrently.
    """

    def create_variant(self, variant: "SchemaVariant") -> None:
        """Drop the variant's table if it exists, then create it with its indexes."""
        ...

    def drop_variant(self, variant: "SchemaVariant") -> None:
        ...

    def insert_records(self, variant: "SchemaVariant", records: Sequence["SessionRecord"]) -> int:
        """
        Insert records into a variant and return how many were written.

        Raises
        ------
        UniquenessViolation
            If any unique column collides with an existing row.
        """
        ...

    def invalidate_cache(self) -> None:
        """Discard cached plans/results so earlier queries cannot speed up later ones."""
        ...

    def refresh_statistics(self, variant: "SchemaVariant") -> None:
        ...

    def count_matching(self, variant: "SchemaVariant", scenario: "Scenario") -> int:
        """Run the scenario's COUNT(*) against the variant with caching bypassed."""
        ...

    def row_count(self, variant: "SchemaVariant") -> int:
        ...

    def close(self) -> None:
        ...


__all__ = ["QueryEngine"]
