"""
Static schema fixtures: the parallel `sessions_*` table variants.

Every variant has the same columns; only the index layout differs. Two
suites are defined:

- ``index_comparison``: no index vs. single-column indexes vs. composite
  and covering indexes.
- ``design_comparison``: a well-designed index set vs. a deliberately bad
  one (low-cardinality leading column, short prefix, wrong column order,
  over-indexing, redundant and unused indexes).

Index column lists are raw SQL fragments and are never built from
user input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from index_bench.errors import UnknownSchemaSetError


@dataclass(frozen=True)
class IndexDefinition:
    name: str
    columns: str
    include: Tuple[str, ...] = ()

    def qualified_name(self, table: str) -> str:
        # PostgreSQL index names share the schema namespace
        return f"{table}_{self.name}"


@dataclass(frozen=True)
class SchemaVariant:
    """
    One table layout. `name` doubles as the table name; `label` is what
    reports show.
    """

    name: str
    label: str
    indexes: Tuple[IndexDefinition, ...] = ()

    @property
    def table(self) -> str:
        return self.name


@dataclass(frozen=True)
class SchemaSet:
    """
    A group of variants populated with identical data and measured together.

    `degradation_pair` names the (good, bad) variants whose direct ratio
    the report should include, when the suite defines one.
    """

    name: str
    description: str
    variants: Tuple[SchemaVariant, ...]
    degradation_pair: Optional[Tuple[str, str]] = None

    def __post_init__(self) -> None:
        names = [variant.name for variant in self.variants]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate variant names in schema set '{self.name}'")
        if self.degradation_pair is not None:
            missing = [v for v in self.degradation_pair if v not in names]
            if missing:
                raise ValueError(
                    f"Degradation pair references unknown variants: {', '.join(missing)}"
                )

    def variant(self, name: str) -> SchemaVariant:
        for variant in self.variants:
            if variant.name == name:
                return variant
        raise KeyError(name)

    @property
    def labels(self) -> Dict[str, str]:
        return {variant.name: variant.label for variant in self.variants}


NO_INDEX = SchemaVariant(name="sessions_no_index", label="No Index")

BASIC_INDEX = SchemaVariant(
    name="sessions_with_index",
    label="Basic Index",
    indexes=(
        IndexDefinition("idx_user_id", "user_id"),
        IndexDefinition("idx_token", "token"),
        IndexDefinition("idx_refresh_token", "refresh_token"),
        IndexDefinition("idx_expires_at", "expires_at"),
        IndexDefinition("idx_is_active", "is_active"),
    ),
)

COMPOSITE_INDEX = SchemaVariant(
    name="sessions_composite_index",
    label="Composite Index",
    indexes=(
        IndexDefinition("idx_user_active", "user_id, is_active"),
        IndexDefinition("idx_expires_active", "expires_at, is_active"),
        IndexDefinition("idx_user_created", "user_id, created_at"),
        IndexDefinition(
            "idx_token_covering", "token", include=("user_id", "expires_at", "is_active")
        ),
        IndexDefinition(
            "idx_refresh_covering",
            "refresh_token",
            include=("user_id", "refresh_expires_at", "is_active"),
        ),
    ),
)

GOOD_INDEX = SchemaVariant(
    name="sessions_good_index",
    label="Good Design",
    indexes=(
        IndexDefinition("idx_user_active", "user_id, is_active"),
        # text_pattern_ops lets LIKE 'prefix%' use the index under any collation
        IndexDefinition("idx_token", "token text_pattern_ops"),
        IndexDefinition("idx_expires_at", "expires_at"),
        IndexDefinition(
            "idx_token_covering", "token", include=("user_id", "expires_at", "is_active")
        ),
    ),
)

BAD_INDEX = SchemaVariant(
    name="sessions_bad_index",
    label="Bad Design",
    indexes=(
        IndexDefinition("idx_bad_order", "is_active, user_id"),
        IndexDefinition("idx_wrong_token", "(left(token, 5))"),
        IndexDefinition("idx_wrong_expires", "created_at, expires_at"),
        IndexDefinition(
            "idx_over_indexed",
            "user_id, token, refresh_token, expires_at, is_active, created_at",
        ),
        IndexDefinition("idx_redundant", "user_id, is_active"),
        IndexDefinition("idx_useless", "updated_at"),
    ),
)

INDEX_COMPARISON = SchemaSet(
    name="index_comparison",
    description="No index vs. basic single-column indexes vs. composite/covering indexes.",
    variants=(NO_INDEX, BASIC_INDEX, COMPOSITE_INDEX),
)

DESIGN_COMPARISON = SchemaSet(
    name="design_comparison",
    description="Well-designed index set vs. a deliberately poor one.",
    variants=(GOOD_INDEX, BAD_INDEX),
    degradation_pair=(GOOD_INDEX.name, BAD_INDEX.name),
)


def _schema_sets() -> Dict[str, SchemaSet]:
    """Registry of available schema sets."""
    return {
        INDEX_COMPARISON.name: INDEX_COMPARISON,
        DESIGN_COMPARISON.name: DESIGN_COMPARISON,
    }


def available_schema_sets() -> List[str]:
    """List available schema set names."""
    return sorted(_schema_sets().keys())


def get_schema_set(name: str) -> SchemaSet:
    registry = _schema_sets()
    if name not in registry:
        raise UnknownSchemaSetError(name, available_schema_sets())
    return registry[name]


__all__ = [
    "IndexDefinition",
    "SchemaVariant",
    "SchemaSet",
    "INDEX_COMPARISON",
    "DESIGN_COMPARISON",
    "available_schema_sets",
    "get_schema_set",
]
