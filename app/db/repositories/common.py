"""Helpers shared by the repositories."""

from datetime import UTC, datetime
from typing import Any

import libsql_experimental as libsql

from app.db.exceptions import PersistenceError


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _execute(conn: libsql.Connection, sql: str, parameters: tuple) -> tuple[list[Any], list[str]]:
    try:
        cursor = conn.execute(sql, parameters)
        rows = cursor.fetchall()
        columns = [desc[0] for desc in cursor.description or ()]
    except Exception as e:
        raise PersistenceError(f"Failed to read from database: {e}") from e
    return rows, columns


def fetch_one(conn: libsql.Connection, sql: str, parameters: tuple = ()) -> dict[str, Any] | None:
    """Execute a query and return the first row as a dict.

    Raises:
        PersistenceError: If the query fails
    """
    rows, columns = _execute(conn, sql, parameters)
    if not rows:
        return None
    return dict(zip(columns, rows[0]))


def fetch_all(conn: libsql.Connection, sql: str, parameters: tuple = ()) -> list[dict[str, Any]]:
    """Execute a query and return every row as a dict.

    Raises:
        PersistenceError: If the query fails
    """
    rows, columns = _execute(conn, sql, parameters)
    return [dict(zip(columns, row)) for row in rows]


def fetch_scalar(conn: libsql.Connection, sql: str, parameters: tuple = (), default: Any = None) -> Any:
    """Execute a query and return the first column of the first row."""
    rows, _ = _execute(conn, sql, parameters)
    return rows[0][0] if rows else default
