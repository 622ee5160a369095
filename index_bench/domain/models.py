"""
Domain models for the index benchmark harness.

Defines the synthetic session row replicated into every schema variant,
the per-(scenario, variant, run) measurement, and the summary of a
generation run. All models are frozen: once produced they are only read.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, Field, computed_field

# Insert order for COPY; `updated_at` is left to the column default.
SESSION_COLUMNS: Tuple[str, ...] = (
    "id",
    "user_id",
    "token",
    "refresh_token",
    "expires_at",
    "refresh_expires_at",
    "is_active",
    "created_at",
)

_MS_QUANTUM = Decimal("0.001")


class SessionRecord(BaseModel):
    """
    Representation of a single synthetic row in every `sessions_*` variant.
    """

    id: uuid.UUID = Field(..., description="Opaque primary key, unique per record.")
    user_id: int = Field(..., ge=1, description="Owner id drawn from a hot/cold bimodal mix.")
    token: str = Field(..., max_length=255, description="Unique access token.")
    refresh_token: str = Field(..., max_length=255, description="Unique refresh token.")
    expires_at: datetime = Field(..., description="created_at plus a mixture offset.")
    refresh_expires_at: datetime = Field(..., description="created_at plus a forward offset.")
    is_active: bool = Field(True, description="Whether the session is active.")
    created_at: datetime = Field(..., description="Creation time within the lookback window.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    def as_row(self) -> tuple:
        """Field values in `SESSION_COLUMNS` order."""
        return tuple(getattr(self, column) for column in SESSION_COLUMNS)


class MeasurementRecord(BaseModel):
    """
    One timed execution of a scenario against a schema variant.
    """

    scenario: str
    variant: str
    label: str = ""
    run: int = Field(1, ge=1)
    elapsed_us: int = Field(..., ge=0, description="Wall-clock duration in microseconds.")
    rows_examined: int = Field(..., ge=0, description="COUNT(*) returned by the scenario query.")

    model_config = {"frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def elapsed_ms(self) -> Decimal:
        return (Decimal(self.elapsed_us) / 1000).quantize(_MS_QUANTUM)


class GenerationSummary(BaseModel):
    """
    Outcome of populating one schema set.
    """

    schema_set: str
    records: int = Field(..., ge=0)
    variants: Tuple[str, ...]
    duration_seconds: float = Field(0.0, ge=0.0)
    throughput_records_per_sec: float = Field(0.0, ge=0.0)
    peak_rss_bytes: Optional[int] = None
    seed: Optional[int] = None

    model_config = {"frozen": True}

    @property
    def rows_written(self) -> int:
        return self.records * len(self.variants)


__all__ = ["SESSION_COLUMNS", "SessionRecord", "MeasurementRecord", "GenerationSummary"]
