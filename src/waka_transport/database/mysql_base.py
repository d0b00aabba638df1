from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

import mysql.connector

from ..core.exceptions import InfrastructureError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Yield (connection, cursor); commit on success, roll back on error.

    Driver errors are re-raised as InfrastructureError so callers only deal with
    domain exceptions.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise InfrastructureError(f"Database unavailable: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise InfrastructureError(f"Database error: {e}") from e
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


def dump_list(values: Optional[Sequence[str]]) -> str:
    """Serialize a list column (stored as JSON text)."""
    return json.dumps(list(values or []), ensure_ascii=False)


def load_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    return [str(v) for v in value]


def placeholders(count: int) -> str:
    return ", ".join(["%s"] * count)
