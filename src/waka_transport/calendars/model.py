from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CalendarInput:
    date: str
    title: str
    description: str
    location: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class CalendarEntry:
    calendar_id: int
    date: str
    title: str
    description: str
    location: str
    start_time: str
    end_time: str

    def to_json(self) -> dict:
        return {
            "id": self.calendar_id,
            "date": self.date,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
