from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Booking, BookingSearch, NewBooking


class BookingRepository(Protocol):
    """Booking persistence used by the booking service, the calendar counts and the reminder job."""

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        raise NotImplementedError

    def list_by_user(self, user_id: int) -> Sequence[Booking]:
        raise NotImplementedError

    def list_by_date(self, date: str) -> Sequence[Booking]:
        raise NotImplementedError

    def search(self, criteria: BookingSearch) -> tuple[int, Sequence[Booking]]:
        """Return (total matching, current page)."""
        raise NotImplementedError

    def count_by_dates(self, dates: Sequence[str]) -> dict[str, int]:
        raise NotImplementedError

    def create(self, booking: NewBooking) -> int:
        raise NotImplementedError

    def delete_by_id(self, booking_id: int) -> bool:
        raise NotImplementedError
