from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Staff
from .repository import StaffRepository


def _row_to_staff(row: dict) -> Staff:
    return Staff(
        staff_id=int(row["staff_id"]),
        email=row["email"],
        role=Role(row["role"]),
        created_at=row.get("created_at"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT staff_id, email, role, created_at FROM staffs WHERE staff_id=%s",
                (staff_id,),
            )
            row = fetchone(cur)
            return _row_to_staff(row) if row else None

    def get_by_email(self, email: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT staff_id, email, role, created_at FROM staffs WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _row_to_staff(row) if row else None

    def create_staff(self, *, email: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO staffs(email, role) VALUES(%s,%s)", (email, role.value))
            return int(cur.lastrowid)
