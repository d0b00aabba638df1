from __future__ import annotations

from datetime import datetime

import pytest

from waka_transport.reminders.job import ReminderJob


@pytest.fixture
def job(bookings, mailer, fixed_now):
    return ReminderJob(bookings, mailer, clock=lambda: fixed_now)


def test_scan_selects_exactly_bookings_dated_today(job, bookings, mailer):
    today_a = bookings.add(email="a@example.com", date="2026-03-14", pickup_time="07:00")
    today_b = bookings.add(email="b@example.com", date="2026-03-14", pickup_time="23:30")
    bookings.add(email="tomorrow@example.com", date="2026-03-15")
    bookings.add(email="yesterday@example.com", date="2026-03-13")

    result = job.run()

    assert result.date == "2026-03-14"
    assert result.scanned == 2
    assert sorted(m.to for m in mailer.sent) == sorted([today_a.email, today_b.email])


def test_reminder_message_content(job, bookings, mailer):
    bookings.add(
        first_name="Aroha",
        last_name="Ngata",
        email="aroha@example.com",
        date="2026-03-14",
        pickup_time="09:30",
        dropoff_time="11:00",
        destination="Whakatane Hospital",
    )

    job.run()

    (message,) = mailer.sent
    assert message.subject == "Upcoming Booking Time"
    assert message.sender == mailer.sender
    assert message.to == "aroha@example.com"
    assert "Dear Aroha Ngata," in message.html
    assert "Date: 2026-03-14" in message.html
    assert "Time: 09:30 -- 11:00" in message.html
    assert "Location: Whakatane Hospital" in message.html


def test_booking_fields_are_html_escaped(job, bookings, mailer):
    bookings.add(first_name="<b>Tama</b>", date="2026-03-14")

    job.run()

    assert "<b>Tama</b>" not in mailer.sent[0].html
    assert "&lt;b&gt;Tama&lt;/b&gt;" in mailer.sent[0].html


def test_send_failure_does_not_stop_the_scan(job, bookings, mailer):
    bookings.add(email="broken@example.com", date="2026-03-14")
    bookings.add(email="fine@example.com", date="2026-03-14")
    mailer.fail_for.add("broken@example.com")

    result = job.run()

    assert [m.to for m in mailer.attempts] == ["broken@example.com", "fine@example.com"]
    assert [m.to for m in mailer.sent] == ["fine@example.com"]
    assert (result.scanned, result.sent, result.failed) == (2, 1, 1)


def test_running_twice_sends_twice(job, bookings, mailer):
    bookings.add(email="a@example.com", date="2026-03-14")
    bookings.add(email="b@example.com", date="2026-03-14")

    job.run()
    job.run()

    assert len(mailer.sent) == 4
    assert sorted(m.to for m in mailer.sent) == ["a@example.com"] * 2 + ["b@example.com"] * 2


def test_listing_failure_aborts_run_without_raising(job, bookings, mailer):
    bookings.add(date="2026-03-14")
    bookings.fail_listing = True

    result = job.run()

    assert result.aborted is True
    assert result.scanned == 0
    assert mailer.attempts == []


def test_no_bookings_today_sends_nothing(job, bookings, mailer):
    bookings.add(date="2026-03-20")

    result = job.run()

    assert (result.scanned, result.sent, result.failed) == (0, 0, 0)
    assert mailer.attempts == []


def test_date_is_zero_padded(bookings, mailer):
    bookings.add(email="early@example.com", date="2026-01-05")
    job = ReminderJob(bookings, mailer, clock=lambda: datetime(2026, 1, 5, 0, 0, 10))

    result = job.run()

    assert result.date == "2026-01-05"
    assert [m.to for m in mailer.sent] == ["early@example.com"]
