from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, TypeVar

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on error.

    Driver errors surface as StorageError so services never see mysql types.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StorageError(f"Database unavailable: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise StorageError(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def map_row(row: Dict[str, Any], mapper: Callable[[Dict[str, Any]], T], *, entity: str) -> T:
    """Convert a driver row into a domain entity, rejecting malformed rows."""

    try:
        return mapper(row)
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageError(f"Malformed {entity} row: {exc!r}") from exc


def require_value(row: Dict[str, Any], column: str) -> Any:
    """Column value, ValueError when it is missing or NULL (use inside a `map_row` mapper)."""

    value = row[column]
    if value is None:
        raise ValueError(f"{column} is NULL")
    return value
