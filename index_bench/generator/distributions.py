"""
Named sampling functions that shape the synthetic session data.

Each function takes the caller's ``random.Random`` so a seeded generator is
reproducible, and draws independently on every call. Ranges are inclusive
integer ranges ``(low, high)``.

Shapes reproduced from production session tables:

- owners: a small hot set of users holds a disproportionate share of sessions
- expiry: a minority of sessions are already expired or about to expire
- activity: most sessions are active
- creation: spread evenly over the last 30 days
"""

from __future__ import annotations

import random
from typing import Tuple

IntRange = Tuple[int, int]

HOT_USER_PROBABILITY = 0.1
HOT_USER_RANGE: IntRange = (1, 100)
COLD_USER_RANGE: IntRange = (101, 1000)

NEAR_EXPIRY_PROBABILITY = 0.3
NEAR_EXPIRY_HOURS: IntRange = (-24, 23)
FAR_EXPIRY_HOURS: IntRange = (1, 168)

REFRESH_EXPIRY_HOURS: IntRange = (24, 191)

ACTIVE_PROBABILITY = 0.8

LOOKBACK_HOURS = 720

SALT_BITS = 128


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


def _check_range(name: str, bounds: IntRange) -> None:
    low, high = bounds
    if low > high:
        raise ValueError(f"{name} is empty: {low} > {high}")


def sample_user_id(
    rng: random.Random,
    hot_probability: float = HOT_USER_PROBABILITY,
    hot_range: IntRange = HOT_USER_RANGE,
    cold_range: IntRange = COLD_USER_RANGE,
) -> int:
    """
    Bimodal owner id.

    With probability ``hot_probability`` the id is uniform over the
    low-cardinality ``hot_range``; otherwise uniform over ``cold_range``.
    The two ranges are expected to be disjoint.
    """
    _check_probability("hot_probability", hot_probability)
    _check_range("hot_range", hot_range)
    _check_range("cold_range", cold_range)
    if rng.random() < hot_probability:
        return rng.randint(*hot_range)
    return rng.randint(*cold_range)


def sample_expiry_offset_hours(
    rng: random.Random,
    near_probability: float = NEAR_EXPIRY_PROBABILITY,
    near_range: IntRange = NEAR_EXPIRY_HOURS,
    far_range: IntRange = FAR_EXPIRY_HOURS,
) -> int:
    """
    Offset of ``expires_at`` from ``created_at``, in hours.

    With probability ``near_probability`` the offset falls in ``near_range``
    (negative to small positive: expired or soon to expire); otherwise in
    ``far_range`` (substantial remaining lifetime).
    """
    _check_probability("near_probability", near_probability)
    _check_range("near_range", near_range)
    _check_range("far_range", far_range)
    if rng.random() < near_probability:
        return rng.randint(*near_range)
    return rng.randint(*far_range)


def sample_refresh_offset_hours(
    rng: random.Random, window: IntRange = REFRESH_EXPIRY_HOURS
) -> int:
    """Offset of ``refresh_expires_at`` from ``created_at``: uniform over ``window``."""
    _check_range("window", window)
    return rng.randint(*window)


def sample_is_active(rng: random.Random, active_probability: float = ACTIVE_PROBABILITY) -> bool:
    _check_probability("active_probability", active_probability)
    return rng.random() < active_probability


def sample_created_hours_ago(rng: random.Random, lookback_hours: int = LOOKBACK_HOURS) -> int:
    """Hours before the reference time, uniform over ``[0, lookback_hours)``."""
    if lookback_hours <= 0:
        raise ValueError(f"lookback_hours must be positive, got {lookback_hours}")
    return rng.randrange(lookback_hours)


def make_unique_token(
    prefix: str, sequence: int, rng: random.Random, salt_bits: int = SALT_BITS
) -> str:
    """
    ``<prefix>_<sequence:06d>_<hex salt>``.

    The sequence number makes tokens unique within a run; the random salt
    keeps separate runs from colliding.
    """
    if sequence < 0:
        raise ValueError(f"sequence must be non-negative, got {sequence}")
    width = (salt_bits + 3) // 4
    return f"{prefix}_{sequence:06d}_{rng.getrandbits(salt_bits):0{width}x}"


__all__ = [
    "HOT_USER_PROBABILITY",
    "HOT_USER_RANGE",
    "COLD_USER_RANGE",
    "NEAR_EXPIRY_PROBABILITY",
    "NEAR_EXPIRY_HOURS",
    "FAR_EXPIRY_HOURS",
    "REFRESH_EXPIRY_HOURS",
    "ACTIVE_PROBABILITY",
    "LOOKBACK_HOURS",
    "sample_user_id",
    "sample_expiry_offset_hours",
    "sample_refresh_offset_hours",
    "sample_is_active",
    "sample_created_hours_ago",
    "make_unique_token",
]
