from __future__ import annotations

from dataclasses import dataclass

from .auth.guard import AuthGuard
from .bookings.mysql_booking_repository import MySQLBookingRepository
from .bookings.repository import BookingRepository
from .bookings.service import BookingService
from .calendars.mysql_calendar_repository import MySQLCalendarRepository
from .calendars.repository import CalendarRepository
from .calendars.service import CalendarService
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mailer import Mailer, SmtpMailer
from .registers.mysql_register_repository import MySQLRegisterRepository
from .registers.repository import RegisterRepository
from .registers.service import RegisterService
from .reminders.job import ReminderJob
from .rosters.mysql_roster_repository import MySQLRosterRepository
from .rosters.repository import RosterRepository
from .rosters.service import RosterService
from .sessions.mysql_session_store import MySQLSessionStore
from .sessions.repository import SessionStore
from .staffs.mysql_staff_repository import MySQLStaffRepository
from .staffs.repository import StaffRepository
from .staffs.service import StaffService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService
from .users.tokens import AccountTokens


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    staffs_repo: StaffRepository
    bookings_repo: BookingRepository
    rosters_repo: RosterRepository
    calendars_repo: CalendarRepository
    registers_repo: RegisterRepository
    session_store: SessionStore
    mailer: Mailer

    auth_guard: AuthGuard
    user_service: UserService
    staff_service: StaffService
    booking_service: BookingService
    roster_service: RosterService
    calendar_service: CalendarService
    register_service: RegisterService
    reminder_job: ReminderJob


def assemble(
    *,
    users_repo: UserRepository,
    staffs_repo: StaffRepository,
    bookings_repo: BookingRepository,
    rosters_repo: RosterRepository,
    calendars_repo: CalendarRepository,
    registers_repo: RegisterRepository,
    session_store: SessionStore,
    mailer: Mailer,
    tokens: AccountTokens,
    admin_email: str,
    staff_email_domain: str,
    frontend_url: str,
) -> Container:
    """Wire services on top of already-built repositories (tests pass in-memory ones)."""
    return Container(
        users_repo=users_repo,
        staffs_repo=staffs_repo,
        bookings_repo=bookings_repo,
        rosters_repo=rosters_repo,
        calendars_repo=calendars_repo,
        registers_repo=registers_repo,
        session_store=session_store,
        mailer=mailer,
        auth_guard=AuthGuard(staffs_repo),
        user_service=UserService(users_repo, mailer, tokens, frontend_url=frontend_url),
        staff_service=StaffService(staffs_repo, email_domain=staff_email_domain),
        booking_service=BookingService(bookings_repo, rosters_repo, mailer, admin_email=admin_email),
        roster_service=RosterService(rosters_repo),
        calendar_service=CalendarService(calendars_repo, bookings_repo),
        register_service=RegisterService(registers_repo, mailer),
        reminder_job=ReminderJob(bookings_repo, mailer),
    )


def build_container(settings) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        staffs_repo=MySQLStaffRepository(conn),
        bookings_repo=MySQLBookingRepository(conn),
        rosters_repo=MySQLRosterRepository(conn),
        calendars_repo=MySQLCalendarRepository(conn),
        registers_repo=MySQLRegisterRepository(conn),
        session_store=MySQLSessionStore(conn),
        mailer=SmtpMailer(settings.SMTP_CONFIG),
        tokens=AccountTokens(
            settings.SECRET_KEY,
            activation_max_age=settings.ACTIVATION_TOKEN_MAX_AGE,
            reset_max_age=settings.RESET_TOKEN_MAX_AGE,
        ),
        admin_email=settings.ADMIN_EMAIL,
        staff_email_domain=settings.STAFF_EMAIL_DOMAIN,
        frontend_url=settings.FRONTEND_URL,
    )
