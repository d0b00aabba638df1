from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RosterInput:
    driver_name: str
    vehicle_plate: str
    start_time: str
    finish_time: str
    date: Optional[str] = None
    availability_time: list[str] = field(default_factory=list)
    availability_status: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Roster:
    """A driver/vehicle shift; the availability lists are parallel (slot, status)."""

    roster_id: int
    driver_name: str
    vehicle_plate: str
    start_time: str
    finish_time: str
    date: Optional[str] = None
    availability_time: list[str] = field(default_factory=list)
    availability_status: list[str] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "id": self.roster_id,
            "date": self.date,
            "driverName": self.driver_name,
            "vehiclePlate": self.vehicle_plate,
            "startTime": self.start_time,
            "finishTime": self.finish_time,
            "availabilityTime": list(self.availability_time),
            "availabilityStatus": list(self.availability_status),
        }
