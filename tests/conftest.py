from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

import pytest

from waka_transport.bookings.model import Booking, BookingSearch, NewBooking
from waka_transport.calendars.model import CalendarEntry, CalendarInput
from waka_transport.common.datetime_utils import utc_now
from waka_transport.container import Container, assemble
from waka_transport.core.enums import Role
from waka_transport.core.exceptions import InfrastructureError, NotificationError
from waka_transport.main import create_app
from waka_transport.notifications.mailer import DeliveryReceipt, EmailMessage
from waka_transport.registers.model import RegisterForm
from waka_transport.rosters.model import Roster, RosterInput
from waka_transport.sessions.model import SessionRecord
from waka_transport.staffs.model import Staff
from waka_transport.users.model import User, UserProfile
from waka_transport.users.tokens import AccountTokens

STAFF_DOMAIN = "@wakaeasternbay.org.nz"


class InMemoryStaffs:
    def __init__(self):
        self.staffs: dict[int, Staff] = {}
        self._id = 0
        self.lookups = 0

    def add(self, email: str, role: Role = Role.STAFF) -> Staff:
        self._id += 1
        staff = Staff(staff_id=self._id, email=email, role=role)
        self.staffs[staff.staff_id] = staff
        return staff

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        self.lookups += 1
        return self.staffs.get(staff_id)

    def get_by_email(self, email: str) -> Optional[Staff]:
        return next((s for s in self.staffs.values() if s.email == email), None)

    def create_staff(self, *, email: str, role: Role) -> int:
        return self.add(email, role).staff_id


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, username: str, password_hash: str, role: Role, profile: UserProfile) -> int:
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id, username=username, password_hash=password_hash, role=role, profile=profile
        )
        return self._id

    def set_password_hash(self, user_id: int, *, password_hash: str) -> bool:
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = replace(user, password_hash=password_hash)
        return True


class InMemoryBookings:
    def __init__(self):
        self.bookings: dict[int, Booking] = {}
        self._id = 0
        self.fail_listing = False

    def add(self, **overrides: Any) -> Booking:
        data = dict(
            user_id=1,
            first_name="Aroha",
            last_name="Ngata",
            phone_number="021 555 0101",
            email="aroha@example.com",
            pickup="12 Domain Rd, Whakatane",
            destination="Whakatane Hospital",
            wheelchair="No",
            passenger=1,
            purpose="Medical appointment",
            trip="Return",
            date="2026-03-14",
            pickup_time="09:30",
            dropoff_time="11:00",
        )
        data.update(overrides)
        return self.get_by_id(self.create(NewBooking(**data)))

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    def list_by_user(self, user_id: int):
        return [b for b in self.bookings.values() if b.user_id == user_id]

    def list_by_date(self, date: str):
        if self.fail_listing:
            raise InfrastructureError("Database unavailable")
        return [b for b in self.bookings.values() if b.date == date]

    def search(self, criteria: BookingSearch):
        rows = list(self.bookings.values())
        if criteria.name:
            rows = [b for b in rows if criteria.name.lower() in b.first_name.lower()]
        if criteria.date:
            rows = [b for b in rows if b.date == criteria.date]
        return len(rows), rows[criteria.offset : criteria.offset + criteria.limit]

    def count_by_dates(self, dates):
        counts: dict[str, int] = {}
        for b in self.bookings.values():
            if b.date in dates:
                counts[b.date] = counts.get(b.date, 0) + 1
        return counts

    def create(self, booking: NewBooking) -> int:
        self._id += 1
        self.bookings[self._id] = Booking(booking_id=self._id, created_at=datetime(2026, 3, 1, 8, 0), **vars(booking))
        return self._id

    def delete_by_id(self, booking_id: int) -> bool:
        return self.bookings.pop(booking_id, None) is not None


class InMemoryRosters:
    def __init__(self):
        self.rosters: dict[int, Roster] = {}
        self._id = 0

    def get_by_id(self, roster_id: int) -> Optional[Roster]:
        return self.rosters.get(roster_id)

    def list_all(self):
        return list(self.rosters.values())

    def list_by_date(self, date: Optional[str]):
        if date is None:
            return self.list_all()
        return [r for r in self.rosters.values() if r.date == date]

    def create(self, roster: RosterInput) -> int:
        self._id += 1
        self.rosters[self._id] = Roster(roster_id=self._id, **vars(roster))
        return self._id

    def update(self, roster_id: int, roster: RosterInput) -> bool:
        self.rosters[roster_id] = Roster(roster_id=roster_id, **vars(roster))
        return True

    def delete_by_id(self, roster_id: int) -> bool:
        return self.rosters.pop(roster_id, None) is not None


class InMemoryCalendars:
    def __init__(self):
        self.entries: dict[int, CalendarEntry] = {}
        self._id = 0

    def get_by_id(self, calendar_id: int) -> Optional[CalendarEntry]:
        return self.entries.get(calendar_id)

    def list_all(self):
        return list(self.entries.values())

    def create(self, entry: CalendarInput) -> int:
        self._id += 1
        self.entries[self._id] = CalendarEntry(calendar_id=self._id, **vars(entry))
        return self._id

    def update(self, calendar_id: int, entry: CalendarInput) -> None:
        self.entries[calendar_id] = CalendarEntry(calendar_id=calendar_id, **vars(entry))

    def delete_by_id(self, calendar_id: int) -> bool:
        return self.entries.pop(calendar_id, None) is not None


class InMemoryRegisters:
    def __init__(self):
        self.forms: dict[int, RegisterForm] = {}
        self._id = 0

    def get_by_id(self, register_id: int) -> Optional[RegisterForm]:
        return self.forms.get(register_id)

    def list_all(self):
        return list(self.forms.values())

    def create(self, *, username: str, password_hash: str, profile: UserProfile) -> int:
        self._id += 1
        self.forms[self._id] = RegisterForm(
            register_id=self._id, username=username, password_hash=password_hash, profile=profile
        )
        return self._id

    def delete_by_id(self, register_id: int) -> bool:
        return self.forms.pop(register_id, None) is not None


class InMemorySessionStore:
    def __init__(self):
        self.records: dict[str, SessionRecord] = {}
        self.fail_destroy = False

    def get(self, session_id: str) -> Optional[SessionRecord]:
        record = self.records.get(session_id)
        if record is None or record.is_expired(utc_now()):
            return None
        return record

    def save(self, *, session_id: str, data: dict, expires_at: datetime) -> None:
        self.records[session_id] = SessionRecord(session_id=session_id, expires_at=expires_at, data=dict(data))

    def destroy(self, session_id: str) -> None:
        if self.fail_destroy:
            raise InfrastructureError("Session store unavailable")
        self.records.pop(session_id, None)


class RecordingMailer:
    """Keeps every message; raises NotificationError for addresses in ``fail_for``."""

    def __init__(self, sender: str = "noreply@wakaeasternbay.org.nz"):
        self.sender = sender
        self.sent: list[EmailMessage] = []
        self.attempts: list[EmailMessage] = []
        self.fail_for: set[str] = set()

    def send(self, message: EmailMessage) -> DeliveryReceipt:
        self.attempts.append(message)
        if message.to in self.fail_for:
            raise NotificationError(f"Failed to send '{message.subject}' to {message.to}")
        self.sent.append(message)
        return DeliveryReceipt(to=message.to, subject=message.subject, response="250 OK")


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 14, 10, 0, 0)


@pytest.fixture
def staffs():
    return InMemoryStaffs()


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def bookings():
    return InMemoryBookings()


@pytest.fixture
def rosters():
    return InMemoryRosters()


@pytest.fixture
def calendars():
    return InMemoryCalendars()


@pytest.fixture
def registers():
    return InMemoryRegisters()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def tokens():
    return AccountTokens("test-secret", activation_max_age=24 * 60 * 60, reset_max_age=60 * 60)


@pytest.fixture
def container(users, staffs, bookings, rosters, calendars, registers, session_store, mailer, tokens) -> Container:
    return assemble(
        users_repo=users,
        staffs_repo=staffs,
        bookings_repo=bookings,
        rosters_repo=rosters,
        calendars_repo=calendars,
        registers_repo=registers,
        session_store=session_store,
        mailer=mailer,
        tokens=tokens,
        admin_email="admin@wakaeasternbay.org.nz",
        staff_email_domain=STAFF_DOMAIN,
        frontend_url="http://localhost:3000",
    )


@pytest.fixture
def app(container):
    return create_app("waka_transport.settings.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def staff_client(client, staffs):
    """Test client whose session already carries a staff identity."""
    staff = staffs.add(f"dispatch{STAFF_DOMAIN}")
    with client.session_transaction() as sess:
        sess["staff_id"] = staff.staff_id
    return client


@pytest.fixture
def user_client(client, users):
    user_id = users.create_user(
        username="aroha",
        password_hash="unused",
        role=Role.USER,
        profile=UserProfile(first_name="Aroha", last_name="Ngata", email="aroha@example.com"),
    )
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
    return client
