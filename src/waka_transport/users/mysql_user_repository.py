from __future__ import annotations

from dataclasses import fields
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, placeholders
from .model import User, UserProfile
from .repository import UserRepository

_PROFILE_COLUMNS = [f.name for f in fields(UserProfile)]
_COLUMNS = ", ".join(["user_id", "username", "password_hash", "role", *_PROFILE_COLUMNS, "created_at"])


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        profile=UserProfile.from_row(row),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def create_user(self, *, username: str, password_hash: str, role: Role, profile: UserProfile) -> int:
        row = profile.as_row()
        columns = ["username", "password_hash", "role", *row.keys()]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO users({', '.join(columns)}) VALUES({placeholders(len(columns))})",
                (username, password_hash, role.value, *row.values()),
            )
            return int(cur.lastrowid)

    def set_password_hash(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0
