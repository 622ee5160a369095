"""
The fixed battery of read-only query scenarios.

Each scenario is a static WHERE predicate with named psycopg placeholders;
engines wrap it as ``SELECT COUNT(*) FROM <variant> WHERE <predicate>``.
The battery is shared by every schema set so rankings are comparable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Tuple

from index_bench.errors import UnknownScenarioError


@dataclass(frozen=True)
class Scenario:
    name: str
    title: str
    description: str
    predicate: str
    params: Mapping[str, Any] = field(default_factory=dict)


BATTERY: Tuple[Scenario, ...] = (
    Scenario(
        name="token_lookup",
        title="Token Search",
        description="Point lookup by exact token value.",
        predicate="token = %(token)s",
        params={"token": "token_000001_abc123"},
    ),
    Scenario(
        name="user_sessions",
        title="User Sessions",
        description="Equality on user_id combined with the low-cardinality is_active flag.",
        predicate="user_id = %(user_id)s AND is_active = TRUE",
        params={"user_id": 50},
    ),
    Scenario(
        name="expired_sessions",
        title="Expired Sessions",
        description="One-sided range on expires_at against the current time.",
        predicate="expires_at < now()",
    ),
    Scenario(
        name="expires_window",
        title="Expires Range",
        description="Bounded window on expires_at over the next day.",
        predicate="expires_at BETWEEN now() AND now() + %(window)s",
        params={"window": timedelta(hours=24)},
    ),
    Scenario(
        name="recent_sessions",
        title="Recent Sessions",
        description="Range on created_at over the last week combined with is_active.",
        predicate="created_at > now() - %(lookback)s AND is_active = TRUE",
        params={"lookback": timedelta(days=7)},
    ),
    Scenario(
        name="complex_range",
        title="Complex Range",
        description="Bounded expires_at window combined with is_active.",
        predicate="expires_at BETWEEN now() AND now() + %(window)s AND is_active = TRUE",
        params={"window": timedelta(hours=24)},
    ),
    Scenario(
        name="token_prefix",
        title="Token Prefix",
        description="LIKE prefix match on token.",
        # '_' is a LIKE wildcard; escape it so only the literal prefix matches
        predicate="token LIKE %(pattern)s",
        params={"pattern": "token\\_000001%"},
    ),
)


def _scenario_index() -> Dict[str, Scenario]:
    return {scenario.name: scenario for scenario in BATTERY}


def scenario_names() -> List[str]:
    """Scenario names in battery order."""
    return [scenario.name for scenario in BATTERY]


def get_scenario(name: str) -> Scenario:
    index = _scenario_index()
    if name not in index:
        raise UnknownScenarioError(name, scenario_names())
    return index[name]


__all__ = ["Scenario", "BATTERY", "scenario_names", "get_scenario"]
