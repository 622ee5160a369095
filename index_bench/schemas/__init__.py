"""
Schema package: static variant fixtures and the manager that creates and
drops them.
"""

from index_bench.schemas.definitions import (
    DESIGN_COMPARISON,
    INDEX_COMPARISON,
    IndexDefinition,
    SchemaSet,
    SchemaVariant,
    available_schema_sets,
    get_schema_set,
)
from index_bench.schemas.manager import SchemaSetManager

__all__ = [
    "IndexDefinition",
    "SchemaVariant",
    "SchemaSet",
    "INDEX_COMPARISON",
    "DESIGN_COMPARISON",
    "available_schema_sets",
    "get_schema_set",
    "SchemaSetManager",
]
