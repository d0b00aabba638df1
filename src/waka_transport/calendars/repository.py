from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CalendarEntry, CalendarInput


class CalendarRepository(Protocol):
    def get_by_id(self, calendar_id: int) -> Optional[CalendarEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[CalendarEntry]:
        raise NotImplementedError

    def create(self, entry: CalendarInput) -> int:
        raise NotImplementedError

    def update(self, calendar_id: int, entry: CalendarInput) -> None:
        raise NotImplementedError

    def delete_by_id(self, calendar_id: int) -> bool:
        raise NotImplementedError
