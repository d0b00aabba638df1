from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import utc_now
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SessionRecord
from .repository import SessionStore


class MySQLSessionStore(SessionStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, session_id: str) -> Optional[SessionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id, data, expires_at
                FROM sessions
                WHERE session_id=%s AND expires_at > %s
                """,
                (session_id, utc_now()),
            )
            row = fetchone(cur)
            if not row:
                return None
            return SessionRecord(
                session_id=row["session_id"],
                expires_at=row["expires_at"],
                data=json.loads(row["data"] or "{}"),
            )

    def save(self, *, session_id: str, data: dict[str, Any], expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(session_id, data, expires_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE data=VALUES(data), expires_at=VALUES(expires_at)
                """,
                (session_id, json.dumps(data), expires_at),
            )

    def destroy(self, session_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE session_id=%s", (session_id,))
