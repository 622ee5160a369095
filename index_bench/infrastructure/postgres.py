"""
PostgreSQL implementation of the QueryEngine protocol.

Maps the harness operations onto PostgreSQL:

- table lifecycle: ``DROP TABLE IF EXISTS`` / ``CREATE TABLE`` / ``CREATE INDEX``
- bulk insert: ``COPY ... FROM STDIN`` with ``write_row`` per record
- cache invalidation: ``DISCARD ALL`` (drops cached plans and session state)
- statistics refresh: ``ANALYZE <table>``
- per-statement cache bypass: ``execute(..., prepare=False)``; the
  connection's ``prepare_threshold`` is also None so no plan is ever reused
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import psycopg
from psycopg import Connection, sql

from index_bench.config import get_settings
from index_bench.domain.models import SESSION_COLUMNS, SessionRecord
from index_bench.errors import UniquenessViolation
from index_bench.infrastructure.db_factory import apply_statement_timeout, get_sync_connection
from index_bench.utils.logging import get_logger

if TYPE_CHECKING:
    from index_bench.scenarios import Scenario
    from index_bench.schemas.definitions import IndexDefinition, SchemaVariant

log = get_logger(__name__)

SESSION_TABLE_DDL = """
    id UUID PRIMARY KEY,
    user_id INTEGER NOT NULL,
    token VARCHAR(255) NOT NULL UNIQUE,
    refresh_token VARCHAR(255) NOT NULL UNIQUE,
    expires_at TIMESTAMPTZ NOT NULL,
    refresh_expires_at TIMESTAMPTZ NOT NULL,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
"""


def index_ddl(variant: "SchemaVariant", index: "IndexDefinition") -> sql.Composed:
    statement = sql.SQL("CREATE INDEX {name} ON {table} ({columns})").format(
        name=sql.Identifier(index.qualified_name(variant.table)),
        table=sql.Identifier(variant.table),
        columns=sql.SQL(index.columns),
    )
    if index.include:
        statement += sql.SQL(" INCLUDE ({})").format(
            sql.SQL(", ").join(sql.Identifier(column) for column in index.include)
        )
    return statement


def count_query(variant: "SchemaVariant", scenario: "Scenario") -> sql.Composed:
    return sql.SQL("SELECT COUNT(*) FROM {table} WHERE {predicate}").format(
        table=sql.Identifier(variant.table),
        predicate=sql.SQL(scenario.predicate),
    )


class PostgresEngine:
    """
    QueryEngine over a single autocommit psycopg connection.

    Usage
    -----
        with PostgresEngine.connect() as engine:
            engine.create_variant(variant)
    """

    def __init__(self, conn: Connection, statement_timeout_ms: int = 0) -> None:
        self._conn = conn
        self._statement_timeout_ms = statement_timeout_ms
        self._apply_session_settings()

    @classmethod
    def connect(cls, dsn_override: Optional[str] = None) -> "PostgresEngine":
        settings = get_settings()
        return cls(
            get_sync_connection(dsn_override),
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    @property
    def connection(self) -> Connection:
        return self._conn

    def _apply_session_settings(self) -> None:
        with self._conn.cursor() as cur:
            apply_statement_timeout(cur, self._statement_timeout_ms)

    def create_variant(self, variant: "SchemaVariant") -> None:
        table = sql.Identifier(variant.table)
        with self._conn.cursor() as cur:
            cur.execute(sql.SQL("DROP TABLE IF EXISTS {} CASCADE").format(table))
            cur.execute(
                sql.SQL("CREATE TABLE {} ({})").format(table, sql.SQL(SESSION_TABLE_DDL))
            )
            for index in variant.indexes:
                cur.execute(index_ddl(variant, index))

    def drop_variant(self, variant: "SchemaVariant") -> None:
        with self._conn.cursor() as cur:
            cur.execute(
                sql.SQL("DROP TABLE IF EXISTS {} CASCADE").format(sql.Identifier(variant.table))
            )

    def insert_records(self, variant: "SchemaVariant", records: Sequence[SessionRecord]) -> int:
        if not records:
            return 0
        statement = sql.SQL("COPY {table} ({columns}) FROM STDIN").format(
            table=sql.Identifier(variant.table),
            columns=sql.SQL(", ").join(sql.Identifier(column) for column in SESSION_COLUMNS),
        )
        try:
            with self._conn.cursor() as cur:
                with cur.copy(statement) as copy:
                    for record in records:
                        copy.write_row(record.as_row())
        except psycopg.errors.UniqueViolation as exc:
            raise UniquenessViolation(variant.table, exc.diag.message_detail) from exc
        return len(records)

    def invalidate_cache(self) -> None:
        with self._conn.cursor() as cur:
            cur.execute("DISCARD ALL")
        # DISCARD ALL also resets session settings such as statement_timeout
        self._apply_session_settings()

    def refresh_statistics(self, variant: "SchemaVariant") -> None:
        with self._conn.cursor() as cur:
            cur.execute(sql.SQL("ANALYZE {}").format(sql.Identifier(variant.table)))

    def count_matching(self, variant: "SchemaVariant", scenario: "Scenario") -> int:
        params = dict(scenario.params) or None
        with self._conn.cursor() as cur:
            cur.execute(count_query(variant, scenario), params, prepare=False)
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def row_count(self, variant: "SchemaVariant") -> int:
        with self._conn.cursor() as cur:
            cur.execute(sql.SQL("SELECT COUNT(*) FROM {}").format(sql.Identifier(variant.table)))
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def close(self) -> None:
        if not self._conn.closed:
            self._conn.close()

    def __enter__(self) -> "PostgresEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["PostgresEngine", "SESSION_TABLE_DDL", "count_query", "index_ddl"]
