from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.validators import optional_str, parse_id, require_fields
from ..core.exceptions import NotFoundError, ValidationError
from .model import Roster, RosterInput
from .repository import RosterRepository

MISSING_MESSAGE = "Roster must include these information"


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError(MISSING_MESSAGE)
    return [str(v) for v in value]


class RosterService:
    def __init__(self, rosters: RosterRepository):
        self._rosters = rosters

    @staticmethod
    def _to_input(data: Mapping[str, Any]) -> RosterInput:
        return RosterInput(
            date=optional_str(data.get("date")),
            driver_name=str(data["driverName"]).strip(),
            vehicle_plate=str(data["vehiclePlate"]).strip(),
            start_time=str(data["startTime"]).strip(),
            finish_time=str(data["finishTime"]).strip(),
            availability_time=_as_list(data.get("availabilityTime")),
            availability_status=_as_list(data.get("availabilityStatus")),
        )

    def list_all(self) -> Sequence[Roster]:
        return self._rosters.list_all()

    def get(self, roster_id: Any) -> Roster:
        rid = parse_id(roster_id, "roster")
        roster = self._rosters.get_by_id(rid)
        if not roster:
            raise NotFoundError("Roster not found")
        return roster

    def create(self, data: Mapping[str, Any]) -> Roster:
        require_fields(data, ("driverName", "vehiclePlate", "startTime", "finishTime"), MISSING_MESSAGE)
        roster_input = self._to_input(data)
        roster_id = self._rosters.create(roster_input)
        return Roster(roster_id=roster_id, **vars(roster_input))

    def update(self, roster_id: Any, data: Mapping[str, Any]) -> Roster:
        """Full replacement: every field, including both availability lists, is required."""
        rid = parse_id(roster_id, "roster")
        require_fields(
            data,
            (
                "date",
                "driverName",
                "vehiclePlate",
                "startTime",
                "finishTime",
                "availabilityTime",
                "availabilityStatus",
            ),
            MISSING_MESSAGE,
        )
        if not self._rosters.get_by_id(rid):
            raise NotFoundError("Roster not found")

        roster_input = self._to_input(data)
        self._rosters.update(rid, roster_input)
        return Roster(roster_id=rid, **vars(roster_input))

    def delete(self, roster_id: Any) -> None:
        rid = parse_id(roster_id, "roster")
        if not self._rosters.get_by_id(rid):
            raise NotFoundError("Roster not found")
        self._rosters.delete_by_id(rid)
