from __future__ import annotations

from index_bench.infrastructure.postgres import count_query, index_ddl
from index_bench.scenarios import get_scenario
from index_bench.schemas.definitions import BAD_INDEX, COMPOSITE_INDEX, GOOD_INDEX, NO_INDEX


def _index(variant, name):
    return next(index for index in variant.indexes if index.name == name)


def test_covering_index_renders_include_clause() -> None:
    statement = index_ddl(COMPOSITE_INDEX, _index(COMPOSITE_INDEX, "idx_token_covering"))

    assert statement.as_string(None) == (
        'CREATE INDEX "sessions_composite_index_idx_token_covering" '
        'ON "sessions_composite_index" (token) '
        'INCLUDE ("user_id", "expires_at", "is_active")'
    )


def test_expression_index_renders_verbatim() -> None:
    statement = index_ddl(BAD_INDEX, _index(BAD_INDEX, "idx_wrong_token"))

    assert statement.as_string(None) == (
        'CREATE INDEX "sessions_bad_index_idx_wrong_token" '
        'ON "sessions_bad_index" ((left(token, 5)))'
    )


def test_plain_index_has_no_include_clause() -> None:
    rendered = index_ddl(GOOD_INDEX, _index(GOOD_INDEX, "idx_token")).as_string(None)

    assert rendered == (
        'CREATE INDEX "sessions_good_index_idx_token" '
        'ON "sessions_good_index" (token text_pattern_ops)'
    )
    assert "INCLUDE" not in rendered


def test_count_query_wraps_predicate() -> None:
    rendered = count_query(NO_INDEX, get_scenario("user_sessions")).as_string(None)

    assert rendered == (
        'SELECT COUNT(*) FROM "sessions_no_index" '
        "WHERE user_id = %(user_id)s AND is_active = TRUE"
    )


def test_prefix_scenario_escapes_like_wildcard() -> None:
    scenario = get_scenario("token_prefix")
    rendered = count_query(GOOD_INDEX, scenario).as_string(None)

    assert rendered.endswith("WHERE token LIKE %(pattern)s")
    # "_" is escaped so only tokens starting with the literal "token_000001" match
    assert scenario.params["pattern"] == r"token\_000001%"
