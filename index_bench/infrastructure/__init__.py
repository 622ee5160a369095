"""
Infrastructure package for the index benchmark harness.

Centralizes database concerns: the QueryEngine protocol, the psycopg
connection factory, and the PostgreSQL engine. Keep this layer focused on
I/O, decoupled from generator/harness logic.
"""

from index_bench.infrastructure.abstract import QueryEngine
from index_bench.infrastructure.db_factory import build_dsn, get_sync_connection
from index_bench.infrastructure.postgres import PostgresEngine

__all__ = [
    "QueryEngine",
    "build_dsn",
    "get_sync_connection",
    "PostgresEngine",
]
