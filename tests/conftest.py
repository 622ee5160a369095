"""
Pytest configuration for the index benchmark harness.

Provides fixtures for:
- An in-memory QueryEngine so unit tests run without a database
- Settings override and connection management for integration tests
- A PostgresEngine bound to the test database
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Dict, Generator, List, Sequence, Set, Tuple

import psycopg
import pytest

from index_bench.config import Settings, get_settings
from index_bench.domain.models import SessionRecord
from index_bench.errors import UniquenessViolation
from index_bench.infrastructure.db_factory import get_sync_connection
from index_bench.infrastructure.postgres import PostgresEngine
from index_bench.scenarios import Scenario
from index_bench.schemas.definitions import SchemaVariant

UNIQUE_COLUMNS = ("id", "token", "refresh_token")
FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryEngine:
    """
    QueryEngine that keeps rows in Python lists and records every call.

    `count_matching` returns the variant's total row count; predicates are
    not evaluated. Pairs in `failing` raise to simulate a broken query.
    """

    def __init__(self) -> None:
        self.tables: Dict[str, List[SessionRecord]] = {}
        self.calls: List[Tuple[str, ...]] = []
        self.failing: Set[Tuple[str, str]] = set()
        self.closed = False

    def create_variant(self, variant: SchemaVariant) -> None:
        self.calls.append(("create", variant.name))
        self.tables[variant.table] = []

    def drop_variant(self, variant: SchemaVariant) -> None:
        self.calls.append(("drop", variant.name))
        self.tables.pop(variant.table, None)

    def insert_records(self, variant: SchemaVariant, records: Sequence[SessionRecord]) -> int:
        rows = self.tables[variant.table]
        for column in UNIQUE_COLUMNS:
            seen = {getattr(row, column) for row in rows}
            for record in records:
                value = getattr(record, column)
                if value in seen:
                    raise UniquenessViolation(
                        variant.table, f"Key ({column})=({value}) already exists."
                    )
                seen.add(value)
        rows.extend(records)
        return len(records)

    def invalidate_cache(self) -> None:
        self.calls.append(("invalidate",))

    def refresh_statistics(self, variant: SchemaVariant) -> None:
        self.calls.append(("analyze", variant.name))
        if variant.table not in self.tables:
            raise RuntimeError(f'relation "{variant.table}" does not exist')

    def count_matching(self, variant: SchemaVariant, scenario: Scenario) -> int:
        self.calls.append(("count", scenario.name, variant.name))
        if (scenario.name, variant.name) in self.failing:
            raise RuntimeError(f'syntax error at or near "{scenario.name}"')
        return len(self.tables[variant.table])

    def row_count(self, variant: SchemaVariant) -> int:
        return len(self.tables.get(variant.table, []))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def memory_engine() -> InMemoryEngine:
    return InMemoryEngine()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "index_benchmark"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture
def pg_engine(test_dsn: str, db_connection_available: bool) -> Generator[PostgresEngine, None, None]:
    """
    PostgresEngine on the test database; skips when the database is unreachable.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    engine = PostgresEngine(get_sync_connection(test_dsn))
    try:
        yield engine
    finally:
        engine.close()
