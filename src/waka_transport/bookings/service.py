from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import format_day, parse_iso_date
from ..common.validators import optional_str, parse_id
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from ..notifications import templates
from ..notifications.mailer import Mailer
from ..rosters.model import Roster
from ..rosters.repository import RosterRepository
from .model import Booking, BookingPage, BookingSearch, NewBooking
from .repository import BookingRepository

logger = logging.getLogger(__name__)

# First missing field wins, in this order.
_REQUIRED_FIELDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("firstName", "lastName"), "Booking must have a passenger's name"),
    (("phoneNumber",), "Booking must have a passenger's phone number"),
    (("email",), "Booking must have a passenger's email address"),
    (("pickup",), "Booking must have a pick-up address"),
    (("destination",), "Booking must have a destination address"),
    (("wheelchair",), "Booking must have a wheelchair question answered"),
    (("passenger",), "Booking must state the number of passengers"),
    (("purpose",), "Booking must have a purpose"),
    (("trip",), "Booking must have the number of trips"),
    (("date",), "Booking must have a booking date"),
    (("pickupTime",), "Booking must have a pick-up time"),
    (("dropoffTime",), "Booking must have a drop-off time"),
)


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _parse_positive_int(value: Any, default: int, label: str) -> int:
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}")
    if parsed <= 0:
        raise ValidationError(f"Invalid {label}")
    return parsed


class BookingService:
    def __init__(
        self,
        bookings: BookingRepository,
        rosters: RosterRepository,
        mailer: Mailer,
        *,
        admin_email: str,
    ):
        self._bookings = bookings
        self._rosters = rosters
        self._mailer = mailer
        self._admin_email = admin_email

    def list_for_user(self, *, user_id: int) -> Sequence[Booking]:
        return self._bookings.list_by_user(user_id)

    def _owned(self, *, user_id: int, booking_id: Any) -> Booking:
        bid = parse_id(booking_id, "booking")
        booking = self._bookings.get_by_id(bid)
        if not booking:
            raise NotFoundError("Booking not found")
        if str(booking.user_id) != str(user_id):
            raise AuthorizationError("You cannot access this booking")
        return booking

    def get_for_user(self, *, user_id: int, booking_id: Any) -> Booking:
        return self._owned(user_id=user_id, booking_id=booking_id)

    @staticmethod
    def validate(data: Mapping[str, Any]) -> None:
        for fields, message in _REQUIRED_FIELDS:
            if any(_is_blank(data.get(f)) for f in fields):
                raise ValidationError(message)

    def create(self, *, user_id: int, data: Mapping[str, Any]) -> Booking:
        self.validate(data)
        try:
            passenger = int(data["passenger"])
        except (TypeError, ValueError):
            raise ValidationError("Booking must state the number of passengers")
        if passenger <= 0:
            raise ValidationError("Booking must state the number of passengers")

        new = NewBooking(
            user_id=int(user_id),
            first_name=str(data["firstName"]).strip(),
            last_name=str(data["lastName"]).strip(),
            phone_number=str(data["phoneNumber"]).strip(),
            email=str(data["email"]).strip(),
            pickup=str(data["pickup"]).strip(),
            destination=str(data["destination"]).strip(),
            wheelchair=str(data["wheelchair"]).strip(),
            passenger=passenger,
            purpose=str(data["purpose"]).strip(),
            trip=str(data["trip"]).strip(),
            date=format_day(parse_iso_date(str(data["date"]).strip())),
            pickup_time=str(data["pickupTime"]).strip(),
            dropoff_time=str(data["dropoffTime"]).strip(),
            additional_notes=optional_str(data.get("additionalNotes")),
        )
        booking_id = self._bookings.create(new)
        booking = Booking(booking_id=booking_id, **vars(new))
        logger.info("Booking %s created for user %s on %s", booking_id, user_id, booking.date)

        self._notify_created(booking)
        return booking

    def _notify_created(self, booking: Booking) -> None:
        # The booking is already stored; a failed confirmation must not undo it.
        sender = self._mailer.sender
        messages = [templates.booking_requested(sender=sender, booking=booking)]
        if self._admin_email:
            messages.append(templates.booking_staff_notice(sender=sender, to=self._admin_email, booking=booking))
        for message in messages:
            try:
                self._mailer.send(message)
            except DomainError:
                logger.exception("Could not send '%s' for booking %s", message.subject, booking.booking_id)

    def delete_for_user(self, *, user_id: int, booking_id: Any) -> None:
        booking = self._owned(user_id=user_id, booking_id=booking_id)
        self._bookings.delete_by_id(booking.booking_id)

    def delete_any(self, *, booking_id: Any) -> None:
        bid = parse_id(booking_id, "booking")
        if not self._bookings.get_by_id(bid):
            raise NotFoundError("Booking not found")
        self._bookings.delete_by_id(bid)

    def search(self, data: Mapping[str, Any]) -> BookingPage:
        criteria = BookingSearch(
            name=optional_str(data.get("name")),
            date=optional_str(data.get("date")),
            limit=_parse_positive_int(data.get("limit"), DEFAULT_PAGE_SIZE, "limit"),
            page=_parse_positive_int(data.get("page"), 1, "page"),
        )
        total, rows = self._bookings.search(criteria)
        return BookingPage(total=total, page=criteria.page, limit=criteria.limit, bookings=list(rows))

    def suggest(self, *, date: Optional[str]) -> Sequence[Roster]:
        """Rosters available on ``date`` (all rosters when no date is given)."""
        return self._rosters.list_by_date(optional_str(date))
