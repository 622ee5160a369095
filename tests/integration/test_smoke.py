"""
Integration tests for the index benchmark harness.

These tests run against a real PostgreSQL instance and verify that:
1. Every variant of a schema set receives identical rows
2. The scenario battery executes on every variant, including empty ones
3. An indexed variant beats an unindexed one on a selective equality filter

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import pytest
from psycopg import sql

from index_bench import orchestrator
from index_bench.errors import UniquenessViolation
from index_bench.generator import DataGenerator
from index_bench.harness import MeasurementHarness
from index_bench.scenarios import BATTERY, get_scenario
from index_bench.schemas.definitions import (
    DESIGN_COMPARISON,
    INDEX_COMPARISON,
    IndexDefinition,
    SchemaSet,
    SchemaVariant,
)
from index_bench.schemas.manager import SchemaSetManager

# Test configuration constants
DEFAULT_RECORDS = 200
DEFAULT_SEED = 123
EQUALITY_RECORDS = 1_000
EQUALITY_TRIALS = 20
MIN_INDEXED_WINS = 18

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)

EQUALITY_SET = SchemaSet(
    name="equality_check",
    description="Unindexed vs. indexed equality filter.",
    variants=(
        SchemaVariant(name="bench_eq_unindexed", label="Unindexed"),
        SchemaVariant(
            name="bench_eq_indexed",
            label="Indexed",
            indexes=(IndexDefinition("idx_user_active", "user_id, is_active"),),
        ),
    ),
)


def _content(engine, table: str):
    query = sql.SQL(
        "SELECT user_id, token, refresh_token, expires_at, refresh_expires_at, is_active, created_at "
        "FROM {} ORDER BY token"
    ).format(sql.Identifier(table))
    with engine.connection.cursor() as cur:
        cur.execute(query)
        return cur.fetchall()


class TestGeneration:
    """Data generation against real tables."""

    def test_variants_receive_identical_rows(self, pg_engine):
        summary = orchestrator.generate(
            DEFAULT_RECORDS, "index_comparison", engine=pg_engine, seed=DEFAULT_SEED
        )
        try:
            assert summary.records == DEFAULT_RECORDS
            counts = SchemaSetManager(pg_engine, INDEX_COMPARISON).row_counts()
            assert set(counts.values()) == {DEFAULT_RECORDS}

            contents = [_content(pg_engine, v.table) for v in INDEX_COMPARISON.variants]
            assert contents[0] == contents[1] == contents[2]
        finally:
            orchestrator.drop("index_comparison", engine=pg_engine)

    def test_rerun_without_reset_raises_uniqueness_violation(self, pg_engine):
        orchestrator.generate(10, "design_comparison", engine=pg_engine, seed=DEFAULT_SEED)
        try:
            with pytest.raises(UniquenessViolation) as excinfo:
                orchestrator.generate(
                    10, "design_comparison", engine=pg_engine, seed=DEFAULT_SEED, reset=False
                )
            assert excinfo.value.table == DESIGN_COMPARISON.variants[0].table
        finally:
            orchestrator.drop("design_comparison", engine=pg_engine)


class TestMeasurement:
    """Scenario battery against real tables."""

    def test_run_all_measures_every_scenario(self, pg_engine):
        report = orchestrator.run_all(
            DEFAULT_RECORDS,
            "design_comparison",
            engine=pg_engine,
            seed=DEFAULT_SEED,
            drop_after=True,
        )

        assert len(report.scenarios) == len(BATTERY)
        for section in report.scenarios:
            assert len(section.entries) == len(DESIGN_COMPARISON.variants)
            # identical data, so every variant matches the same rows
            assert len({e.rows_examined for e in section.entries}) == 1
            assert section.degradation is not None

        user_sessions = report.scenario("user_sessions")
        assert user_sessions.entries[0].rows_examined <= DEFAULT_RECORDS

    def test_empty_variants_report_zero_rows(self, pg_engine):
        orchestrator.generate(0, "index_comparison", engine=pg_engine)
        try:
            report = orchestrator.measure("index_comparison", engine=pg_engine)
        finally:
            orchestrator.drop("index_comparison", engine=pg_engine)

        assert all(e.rows_examined == 0 for s in report.scenarios for e in s.entries)

    @pytest.mark.slow
    def test_indexed_variant_wins_equality_filter(self, pg_engine):
        manager = SchemaSetManager(pg_engine, EQUALITY_SET)
        manager.create_all()
        try:
            DataGenerator(seed=DEFAULT_SEED).populate(
                pg_engine, EQUALITY_SET.variants, EQUALITY_RECORDS, batch_size=500
            )
            harness = MeasurementHarness(pg_engine, scenarios=[get_scenario("user_sessions")])

            wins = 0
            for trial in range(1, EQUALITY_TRIALS + 1):
                by_variant = {
                    m.variant: m for m in harness.measure(EQUALITY_SET.variants, run=trial)
                }
                indexed = by_variant["bench_eq_indexed"].elapsed_us
                unindexed = by_variant["bench_eq_unindexed"].elapsed_us
                if indexed <= unindexed:
                    wins += 1
        finally:
            manager.drop_all()

        assert wins >= MIN_INDEXED_WINS, f"Indexed variant won only {wins}/{EQUALITY_TRIALS}"
