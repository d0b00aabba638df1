from __future__ import annotations

import pytest

from waka_transport.core.exceptions import NotFoundError, ValidationError


def calendar_payload(**overrides):
    payload = {
        "date": "2026-03-20",
        "title": "Vehicle service",
        "description": "WAKA1 booked in for a warrant of fitness",
        "location": "Whakatane depot",
        "startTime": "09:00",
        "endTime": "12:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def service(container):
    return container.calendar_service


def test_month_counts_follow_request_order_with_zero_defaults(service, bookings):
    bookings.add(date="2026-03-02")
    bookings.add(date="2026-03-02")
    bookings.add(date="2026-03-01")

    counts = service.month_counts(["2026-03-02", "2026-03-03", "2026-03-01"])

    assert counts == [
        {"date": "2026-03-02", "count": 2},
        {"date": "2026-03-03", "count": 0},
        {"date": "2026-03-01", "count": 1},
    ]


def test_month_counts_requires_a_list(service):
    with pytest.raises(ValidationError):
        service.month_counts("2026-03-01")


def test_create_requires_every_field(service):
    with pytest.raises(ValidationError, match="Calendar must include all required information"):
        service.create(calendar_payload(location=""))


def test_update_and_delete(service, calendars):
    entry = service.create(calendar_payload())

    service.update(entry.calendar_id, calendar_payload(title="Driver training"))
    assert calendars.get_by_id(entry.calendar_id).title == "Driver training"

    service.delete(str(entry.calendar_id))
    assert calendars.entries == {}

    with pytest.raises(NotFoundError, match="Calendar not found"):
        service.get(entry.calendar_id)


def test_month_endpoint(staff_client, bookings):
    bookings.add(date="2026-03-14")

    resp = staff_client.post("/api/calendars/month", json={"dateArr": ["2026-03-14", "2026-03-15"]})

    assert resp.status_code == 200
    assert resp.get_json() == [{"date": "2026-03-14", "count": 1}, {"date": "2026-03-15", "count": 0}]


def test_calendar_crud_endpoints(staff_client):
    created = staff_client.post("/api/calendars", json=calendar_payload())
    assert created.status_code == 201
    calendar_id = created.get_json()["id"]

    assert staff_client.get(f"/api/calendars/{calendar_id}").get_json()["location"] == "Whakatane depot"
    assert len(staff_client.get("/api/calendars").get_json()) == 1
    assert staff_client.delete(f"/api/calendars/{calendar_id}").status_code == 204


def test_calendars_are_staff_only(client):
    resp = client.post("/api/calendars/month", json={"dateArr": []})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Staff not authenticated"}
