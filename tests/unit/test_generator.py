from __future__ import annotations

import re
from datetime import timedelta

import pytest

from index_bench.errors import UniquenessViolation
from index_bench.generator import DataGenerator
from index_bench.schemas.definitions import DESIGN_COMPARISON, INDEX_COMPARISON
from index_bench.schemas.manager import SchemaSetManager


@pytest.fixture
def populated(memory_engine, fixed_clock):
    SchemaSetManager(memory_engine, INDEX_COMPARISON).create_all()
    summary = DataGenerator(seed=11, clock=fixed_clock).populate(
        memory_engine, INDEX_COMPARISON.variants, 250, batch_size=100, schema_set="index_comparison"
    )
    return memory_engine, summary


def test_populate_writes_count_rows_to_every_variant(populated) -> None:
    engine, summary = populated

    assert summary.records == 250
    assert summary.rows_written == 750
    assert summary.variants == tuple(v.name for v in INDEX_COMPARISON.variants)
    assert summary.seed == 11
    for variant in INDEX_COMPARISON.variants:
        assert engine.row_count(variant) == 250


def test_variants_hold_identical_content(populated) -> None:
    engine, _ = populated
    dumps = [
        [record.model_dump() for record in engine.tables[variant.table]]
        for variant in INDEX_COMPARISON.variants
    ]
    assert dumps[0] == dumps[1] == dumps[2]


def test_unique_columns_are_unique_within_run(populated) -> None:
    engine, _ = populated
    rows = engine.tables[INDEX_COMPARISON.variants[0].table]
    for column in ("id", "token", "refresh_token"):
        assert len({getattr(r, column) for r in rows}) == len(rows)
    assert all(re.fullmatch(r"token_\d{6}_[0-9a-f]{32}", r.token) for r in rows)
    assert all(r.refresh_token.startswith("refresh_") for r in rows)


def test_timestamps_follow_offsets_from_created_at(populated, fixed_clock) -> None:
    engine, _ = populated
    now = fixed_clock()
    for record in engine.tables[INDEX_COMPARISON.variants[0].table]:
        assert now - timedelta(hours=720) < record.created_at <= now
        expiry = record.expires_at - record.created_at
        refresh = record.refresh_expires_at - record.created_at
        assert timedelta(hours=-24) <= expiry <= timedelta(hours=168)
        assert timedelta(hours=24) <= refresh <= timedelta(hours=191)


def test_zero_records_leaves_variants_empty(memory_engine) -> None:
    SchemaSetManager(memory_engine, DESIGN_COMPARISON).create_all()
    summary = DataGenerator(seed=1).populate(memory_engine, DESIGN_COMPARISON.variants, 0)

    assert summary.records == 0
    assert summary.throughput_records_per_sec >= 0.0
    for variant in DESIGN_COMPARISON.variants:
        assert memory_engine.row_count(variant) == 0


def test_same_seed_reproduces_records(fixed_clock) -> None:
    first = list(DataGenerator(seed=5, clock=fixed_clock).iter_records(5))
    second = list(DataGenerator(seed=5, clock=fixed_clock).iter_records(5))
    assert first == second
    assert [r.token[:12] for r in first] == [f"token_{i:06d}" for i in range(1, 6)]


def test_rerun_with_same_seed_without_reset_raises(memory_engine, fixed_clock) -> None:
    SchemaSetManager(memory_engine, DESIGN_COMPARISON).create_all()
    DataGenerator(seed=3, clock=fixed_clock).populate(memory_engine, DESIGN_COMPARISON.variants, 20)

    with pytest.raises(UniquenessViolation) as excinfo:
        DataGenerator(seed=3, clock=fixed_clock).populate(
            memory_engine, DESIGN_COMPARISON.variants, 20
        )
    assert excinfo.value.table == DESIGN_COMPARISON.variants[0].table


def test_invalid_arguments_raise_value_error(memory_engine) -> None:
    generator = DataGenerator(seed=1)
    with pytest.raises(ValueError):
        generator.iter_records(-1)
    with pytest.raises(ValueError):
        generator.populate(memory_engine, DESIGN_COMPARISON.variants, 10, batch_size=0)
