from __future__ import annotations

from dataclasses import fields
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from ..users.model import UserProfile
from .model import RegisterForm
from .repository import RegisterRepository

_COLUMNS = ", ".join(
    ["register_id", "username", "password_hash", *[f.name for f in fields(UserProfile)], "created_at"]
)


def _row_to_form(row: dict) -> RegisterForm:
    return RegisterForm(
        register_id=int(row["register_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        profile=UserProfile.from_row(row),
        created_at=row.get("created_at"),
    )


class MySQLRegisterRepository(RegisterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, register_id: int) -> Optional[RegisterForm]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registers WHERE register_id=%s", (register_id,))
            row = fetchone(cur)
            return _row_to_form(row) if row else None

    def list_all(self) -> Sequence[RegisterForm]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registers ORDER BY created_at DESC, register_id DESC")
            return [_row_to_form(r) for r in fetchall(cur)]

    def create(self, *, username: str, password_hash: str, profile: UserProfile) -> int:
        row = profile.as_row()
        columns = ["username", "password_hash", *row.keys()]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO registers({', '.join(columns)}) VALUES({placeholders(len(columns))})",
                (username, password_hash, *row.values()),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, register_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM registers WHERE register_id=%s", (register_id,))
            return cur.rowcount > 0
