from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CalendarEntry, CalendarInput
from .repository import CalendarRepository

_COLUMNS = "calendar_id, date, title, description, location, start_time, end_time"


def _row_to_entry(row: dict) -> CalendarEntry:
    return CalendarEntry(
        calendar_id=int(row["calendar_id"]),
        date=row["date"],
        title=row["title"],
        description=row["description"],
        location=row["location"],
        start_time=row["start_time"],
        end_time=row["end_time"],
    )


class MySQLCalendarRepository(CalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, calendar_id: int) -> Optional[CalendarEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM calendars WHERE calendar_id=%s", (calendar_id,))
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def list_all(self) -> Sequence[CalendarEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM calendars ORDER BY date, start_time")
            return [_row_to_entry(r) for r in fetchall(cur)]

    def create(self, entry: CalendarInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO calendars(date, title, description, location, start_time, end_time)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (entry.date, entry.title, entry.description, entry.location, entry.start_time, entry.end_time),
            )
            return int(cur.lastrowid)

    def update(self, calendar_id: int, entry: CalendarInput) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE calendars
                SET date=%s, title=%s, description=%s, location=%s, start_time=%s, end_time=%s
                WHERE calendar_id=%s
                """,
                (
                    entry.date,
                    entry.title,
                    entry.description,
                    entry.location,
                    entry.start_time,
                    entry.end_time,
                    calendar_id,
                ),
            )

    def delete_by_id(self, calendar_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM calendars WHERE calendar_id=%s", (calendar_id,))
            return cur.rowcount > 0
