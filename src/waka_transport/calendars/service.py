from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..bookings.repository import BookingRepository
from ..common.validators import parse_id, require_fields
from ..core.exceptions import NotFoundError, ValidationError
from .model import CalendarEntry, CalendarInput
from .repository import CalendarRepository

MISSING_MESSAGE = "Calendar must include all required information"
_FIELDS = ("date", "title", "description", "location", "startTime", "endTime")


class CalendarService:
    def __init__(self, calendars: CalendarRepository, bookings: BookingRepository):
        self._calendars = calendars
        self._bookings = bookings

    @staticmethod
    def _to_input(data: Mapping[str, Any]) -> CalendarInput:
        require_fields(data, _FIELDS, MISSING_MESSAGE)
        return CalendarInput(
            date=str(data["date"]).strip(),
            title=str(data["title"]).strip(),
            description=str(data["description"]).strip(),
            location=str(data["location"]).strip(),
            start_time=str(data["startTime"]).strip(),
            end_time=str(data["endTime"]).strip(),
        )

    def month_counts(self, dates: Any) -> list[dict]:
        """Booking count for every requested date, in request order; dates without bookings get 0."""
        if not isinstance(dates, (list, tuple)):
            raise ValidationError("dateArr must be a list of dates")
        wanted = [str(d) for d in dates]
        counts = self._bookings.count_by_dates(sorted(set(wanted)))
        return [{"date": d, "count": counts.get(d, 0)} for d in wanted]

    def list_all(self) -> Sequence[CalendarEntry]:
        return self._calendars.list_all()

    def get(self, calendar_id: Any) -> CalendarEntry:
        cid = parse_id(calendar_id, "calendar")
        entry = self._calendars.get_by_id(cid)
        if not entry:
            raise NotFoundError("Calendar not found")
        return entry

    def create(self, data: Mapping[str, Any]) -> CalendarEntry:
        entry = self._to_input(data)
        calendar_id = self._calendars.create(entry)
        return CalendarEntry(calendar_id=calendar_id, **vars(entry))

    def update(self, calendar_id: Any, data: Mapping[str, Any]) -> CalendarEntry:
        cid = parse_id(calendar_id, "calendar")
        entry = self._to_input(data)
        if not self._calendars.get_by_id(cid):
            raise NotFoundError("Calendar not found")
        self._calendars.update(cid, entry)
        return CalendarEntry(calendar_id=cid, **vars(entry))

    def delete(self, calendar_id: Any) -> None:
        cid = parse_id(calendar_id, "calendar")
        if not self._calendars.get_by_id(cid):
            raise NotFoundError("Calendar not found")
        self._calendars.delete_by_id(cid)
