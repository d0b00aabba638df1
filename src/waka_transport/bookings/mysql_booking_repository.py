from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import Booking, BookingSearch, NewBooking
from .repository import BookingRepository

_COLUMNS = """
    booking_id, user_id, first_name, last_name, phone_number, email, pickup, destination,
    wheelchair, passenger, purpose, trip, date, pickup_time, dropoff_time, additional_notes, created_at
"""


def _row_to_booking(row: dict) -> Booking:
    return Booking(
        booking_id=int(row["booking_id"]),
        user_id=int(row["user_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        phone_number=row["phone_number"],
        email=row["email"],
        pickup=row["pickup"],
        destination=row["destination"],
        wheelchair=row["wheelchair"],
        passenger=int(row["passenger"]),
        purpose=row["purpose"],
        trip=row["trip"],
        date=row["date"],
        pickup_time=row["pickup_time"],
        dropoff_time=row["dropoff_time"],
        additional_notes=row.get("additional_notes"),
        created_at=row.get("created_at"),
    )


def _like_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MySQLBookingRepository(BookingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM bookings WHERE booking_id=%s", (booking_id,))
            row = fetchone(cur)
            return _row_to_booking(row) if row else None

    def list_by_user(self, user_id: int) -> Sequence[Booking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM bookings WHERE user_id=%s ORDER BY date, pickup_time",
                (user_id,),
            )
            return [_row_to_booking(r) for r in fetchall(cur)]

    def list_by_date(self, date: str) -> Sequence[Booking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM bookings WHERE date=%s ORDER BY pickup_time", (date,))
            return [_row_to_booking(r) for r in fetchall(cur)]

    def search(self, criteria: BookingSearch) -> tuple[int, Sequence[Booking]]:
        where: list[str] = []
        params: list = []
        if criteria.name:
            where.append("LOWER(first_name) LIKE %s")
            params.append(f"%{_like_escape(criteria.name.lower())}%")
        if criteria.date:
            where.append("date=%s")
            params.append(criteria.date)
        where_sql = f"WHERE {' AND '.join(where)}" if where else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM bookings {where_sql}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                f"SELECT {_COLUMNS} FROM bookings {where_sql} ORDER BY booking_id LIMIT %s OFFSET %s",
                tuple(params) + (criteria.limit, criteria.offset),
            )
            return total, [_row_to_booking(r) for r in fetchall(cur)]

    def count_by_dates(self, dates: Sequence[str]) -> dict[str, int]:
        if not dates:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT date, COUNT(*) AS cnt FROM bookings WHERE date IN ({placeholders(len(dates))}) GROUP BY date",
                tuple(dates),
            )
            return {r["date"]: int(r["cnt"]) for r in fetchall(cur)}

    def create(self, booking: NewBooking) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO bookings(user_id, first_name, last_name, phone_number, email, pickup, destination,
                                     wheelchair, passenger, purpose, trip, date, pickup_time, dropoff_time,
                                     additional_notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    booking.user_id,
                    booking.first_name,
                    booking.last_name,
                    booking.phone_number,
                    booking.email,
                    booking.pickup,
                    booking.destination,
                    booking.wheelchair,
                    booking.passenger,
                    booking.purpose,
                    booking.trip,
                    booking.date,
                    booking.pickup_time,
                    booking.dropoff_time,
                    booking.additional_notes,
                ),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, booking_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM bookings WHERE booking_id=%s", (booking_id,))
            return cur.rowcount > 0
