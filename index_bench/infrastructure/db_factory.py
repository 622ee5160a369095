"""
Database connection factory for the index benchmark harness.

Builds the DSN from settings and opens dedicated psycopg connections with
retry logic for transient connection failures (tenacity). The harness is
strictly sequential, so it uses one connection per run rather than a pool.

Connections are opened in autocommit mode (each statement sees its own
``now()``, and ``DISCARD ALL`` cannot run inside a transaction block) with
automatic server-side statement preparation disabled.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from index_bench.config import get_settings


def build_dsn() -> str:
    """Compose a DSN string from settings."""
    settings = get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def apply_statement_timeout(cursor: psycopg.Cursor, timeout_ms: int) -> None:
    """Set the session statement timeout; 0 leaves it unlimited."""
    if timeout_ms > 0:
        cursor.execute(f"SET statement_timeout = {int(timeout_ms)}")


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn_override: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Parameters
    ----------
    dsn_override : str | None
        Connect to this DSN instead of the one built from settings.

    Returns
    -------
    Connection
        An autocommit psycopg connection that never prepares statements.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    settings = get_settings()
    conn = psycopg.connect(
        dsn_override or build_dsn(),
        autocommit=True,
        connect_timeout=settings.db_connect_timeout,
    )
    conn.prepare_threshold = None
    return conn


__all__ = ["build_dsn", "apply_statement_timeout", "get_sync_connection"]
