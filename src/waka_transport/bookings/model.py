from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class NewBooking:
    user_id: int
    first_name: str
    last_name: str
    phone_number: str
    email: str
    pickup: str
    destination: str
    wheelchair: str
    passenger: int
    purpose: str
    trip: str
    date: str
    pickup_time: str
    dropoff_time: str
    additional_notes: Optional[str] = None


@dataclass(frozen=True)
class Booking:
    """A ride request. ``date`` is a zero-padded YYYY-MM-DD string."""

    booking_id: int
    user_id: int
    first_name: str
    last_name: str
    phone_number: str
    email: str
    pickup: str
    destination: str
    wheelchair: str
    passenger: int
    purpose: str
    trip: str
    date: str
    pickup_time: str
    dropoff_time: str
    additional_notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_json(self) -> dict:
        return {
            "id": self.booking_id,
            "userId": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "email": self.email,
            "pickup": self.pickup,
            "destination": self.destination,
            "wheelchair": self.wheelchair,
            "passenger": self.passenger,
            "purpose": self.purpose,
            "trip": self.trip,
            "date": self.date,
            "pickupTime": self.pickup_time,
            "dropoffTime": self.dropoff_time,
            "additionalNotes": self.additional_notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class BookingSearch:
    """Staff search over all bookings: first-name substring (case-insensitive) and exact date."""

    name: Optional[str] = None
    date: Optional[str] = None
    limit: int = DEFAULT_PAGE_SIZE
    page: int = 1

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class BookingPage:
    total: int
    page: int
    limit: int
    bookings: list[Booking]

    def to_json(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "bookings": [b.to_json() for b in self.bookings],
        }
