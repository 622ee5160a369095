"""
Distribution-aware data generator.

Synthesizes session records with the shapes defined in
``index_bench.generator.distributions`` and writes every record into every
variant of a schema set, batch by batch, so all variants hold identical
data. Cost is linear in records x variants; nothing reads existing rows.
"""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone
from itertools import islice
from typing import Callable, Iterator, List, Optional, Sequence

from index_bench.domain.models import GenerationSummary, SessionRecord
from index_bench.generator.distributions import (
    make_unique_token,
    sample_created_hours_ago,
    sample_expiry_offset_hours,
    sample_is_active,
    sample_refresh_offset_hours,
    sample_user_id,
)
from index_bench.infrastructure.abstract import QueryEngine
from index_bench.schemas.definitions import SchemaVariant
from index_bench.utils.logging import get_logger
from index_bench.utils.profiler import profile_block

log = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _batched(records: Iterator[SessionRecord], batch_size: int) -> Iterator[List[SessionRecord]]:
    while True:
        batch = list(islice(records, batch_size))
        if not batch:
            break
        yield batch


class DataGenerator:
    """
    Produces session records from a single RNG.

    Parameters
    ----------
    seed : int | None
        RNG seed. None draws from system entropy, so repeated runs get fresh
        tokens; a fixed seed reproduces the same records (and will collide
        with rows left over from an earlier run with the same seed).
    clock : callable
        Returns the reference "now"; captured once per ``iter_records`` call.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self._clock = clock

    def make_record(self, sequence: int, reference_now: datetime) -> SessionRecord:
        rng = self._rng
        created_at = reference_now - timedelta(hours=sample_created_hours_ago(rng))
        return SessionRecord(
            id=uuid.UUID(int=rng.getrandbits(128), version=4),
            user_id=sample_user_id(rng),
            token=make_unique_token("token", sequence, rng),
            refresh_token=make_unique_token("refresh", sequence, rng),
            expires_at=created_at + timedelta(hours=sample_expiry_offset_hours(rng)),
            refresh_expires_at=created_at + timedelta(hours=sample_refresh_offset_hours(rng)),
            is_active=sample_is_active(rng),
            created_at=created_at,
        )

    def iter_records(self, count: int) -> Iterator[SessionRecord]:
        """Lazily yield exactly ``count`` records with sequence numbers 1..count."""
        if count < 0:
            raise ValueError(f"record count must be non-negative, got {count}")
        return self._records(count, self._clock())

    def _records(self, count: int, reference_now: datetime) -> Iterator[SessionRecord]:
        for sequence in range(1, count + 1):
            yield self.make_record(sequence, reference_now)

    def populate(
        self,
        engine: QueryEngine,
        variants: Sequence[SchemaVariant],
        count: int,
        batch_size: int = 1_000,
        schema_set: str = "",
    ) -> GenerationSummary:
        """
        Generate ``count`` records and insert each one into every variant.

        Raises
        ------
        UniquenessViolation
            When a unique value collides with an existing row (the variants
            were not reset since an earlier run). Not retried.
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        records = self.iter_records(count)

        log.info(
            f"Generating {count} realistic test records...",
            extra={"schema_set": schema_set, "records": count, "variants": len(variants)},
        )
        written = 0
        with profile_block(f"generate:{schema_set}") as stats:
            for batch in _batched(records, batch_size):
                for variant in variants:
                    engine.insert_records(variant, batch)
                written += len(batch)
                log.debug(
                    f"[GENERATE] {written}/{count} records written",
                    extra={"schema_set": schema_set, "written": written},
                )
        log.info(
            f"Completed generating {count} realistic records",
            extra={
                "schema_set": schema_set,
                "records": written,
                "duration": round(stats.duration_seconds, 2),
            },
        )

        duration = stats.duration_seconds
        return GenerationSummary(
            schema_set=schema_set,
            records=written,
            variants=tuple(variant.name for variant in variants),
            duration_seconds=round(duration, 2),
            throughput_records_per_sec=round(written / duration, 2) if duration > 0 else 0.0,
            peak_rss_bytes=stats.peak_rss_bytes,
            seed=self.seed,
        )


__all__ = ["DataGenerator", "utc_now"]
