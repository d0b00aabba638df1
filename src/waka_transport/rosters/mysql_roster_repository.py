from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_list, fetchall, fetchone, load_list
from .model import Roster, RosterInput
from .repository import RosterRepository

_COLUMNS = "roster_id, date, driver_name, vehicle_plate, start_time, finish_time, availability_time, availability_status"


def _row_to_roster(row: dict) -> Roster:
    return Roster(
        roster_id=int(row["roster_id"]),
        date=row.get("date"),
        driver_name=row["driver_name"],
        vehicle_plate=row["vehicle_plate"],
        start_time=row["start_time"],
        finish_time=row["finish_time"],
        availability_time=load_list(row.get("availability_time")),
        availability_status=load_list(row.get("availability_status")),
    )


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, roster_id: int) -> Optional[Roster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM rosters WHERE roster_id=%s", (roster_id,))
            row = fetchone(cur)
            return _row_to_roster(row) if row else None

    def list_all(self) -> Sequence[Roster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM rosters ORDER BY date, start_time")
            return [_row_to_roster(r) for r in fetchall(cur)]

    def list_by_date(self, date: Optional[str]) -> Sequence[Roster]:
        if date is None:
            return self.list_all()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM rosters WHERE date=%s ORDER BY start_time", (date,))
            return [_row_to_roster(r) for r in fetchall(cur)]

    def create(self, roster: RosterInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO rosters(date, driver_name, vehicle_plate, start_time, finish_time,
                                    availability_time, availability_status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    roster.date,
                    roster.driver_name,
                    roster.vehicle_plate,
                    roster.start_time,
                    roster.finish_time,
                    dump_list(roster.availability_time),
                    dump_list(roster.availability_status),
                ),
            )
            return int(cur.lastrowid)

    def update(self, roster_id: int, roster: RosterInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE rosters
                SET date=%s, driver_name=%s, vehicle_plate=%s, start_time=%s, finish_time=%s,
                    availability_time=%s, availability_status=%s
                WHERE roster_id=%s
                """,
                (
                    roster.date,
                    roster.driver_name,
                    roster.vehicle_plate,
                    roster.start_time,
                    roster.finish_time,
                    dump_list(roster.availability_time),
                    dump_list(roster.availability_status),
                    roster_id,
                ),
            )
            # rowcount is 0 when the values did not change, so existence is checked by the caller
            return cur.rowcount >= 0

    def delete_by_id(self, roster_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM rosters WHERE roster_id=%s", (roster_id,))
            return cur.rowcount > 0
