from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Roster, RosterInput


class RosterRepository(Protocol):
    def get_by_id(self, roster_id: int) -> Optional[Roster]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Roster]:
        raise NotImplementedError

    def list_by_date(self, date: Optional[str]) -> Sequence[Roster]:
        """Rosters for ``date``; every roster when ``date`` is None."""
        raise NotImplementedError

    def create(self, roster: RosterInput) -> int:
        raise NotImplementedError

    def update(self, roster_id: int, roster: RosterInput) -> bool:
        raise NotImplementedError

    def delete_by_id(self, roster_id: int) -> bool:
        raise NotImplementedError
