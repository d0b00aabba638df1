from __future__ import annotations

from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape

from ..core.constants import ORGANISATION_NAME, ORGANISATION_URL
from .mailer import EmailMessage

if TYPE_CHECKING:
    from ..bookings.model import Booking
    from ..registers.model import RegisterForm

REMINDER_SUBJECT = "Upcoming Booking Time"
ACCOUNT_APPROVED_SUBJECT = "Your Application has been approved"
PASSWORD_RESET_SUBJECT = "Reset your password"
BOOKING_REQUESTED_SUBJECT = "Your Booking Request"
BOOKING_STAFF_NOTICE_SUBJECT = "User's Booking Request"
REGISTRATION_DENIED_SUBJECT = "Your Registration"

_env = Environment(
    loader=PackageLoader("waka_transport", "notifications/email_templates"),
    autoescape=select_autoescape(["html"]),
)


def render(template_name: str, **context) -> str:
    context.setdefault("organisation_name", ORGANISATION_NAME)
    context.setdefault("organisation_url", ORGANISATION_URL)
    return _env.get_template(template_name).render(**context)


def booking_reminder(*, sender: str, booking: "Booking") -> EmailMessage:
    return EmailMessage(
        sender=sender,
        to=booking.email,
        subject=REMINDER_SUBJECT,
        html=render("booking_reminder.html", booking=booking),
    )


def account_approved(*, sender: str, to: str, first_name: str, last_name: str, link: str) -> EmailMessage:
    return EmailMessage(
        sender=sender,
        to=to,
        subject=ACCOUNT_APPROVED_SUBJECT,
        html=render("account_approved.html", first_name=first_name, last_name=last_name, link=link),
    )


def password_reset(*, sender: str, to: str, first_name: str, last_name: str, link: str) -> EmailMessage:
    return EmailMessage(
        sender=sender,
        to=to,
        subject=PASSWORD_RESET_SUBJECT,
        html=render("password_reset.html", first_name=first_name, last_name=last_name, link=link),
    )


def booking_requested(*, sender: str, booking: "Booking") -> EmailMessage:
    return EmailMessage(
        sender=sender,
        to=booking.email,
        subject=BOOKING_REQUESTED_SUBJECT,
        html=render("booking_requested.html", booking=booking),
    )


def booking_staff_notice(*, sender: str, to: str, booking: "Booking") -> EmailMessage:
    return EmailMessage(
        sender=sender,
        to=to,
        subject=BOOKING_STAFF_NOTICE_SUBJECT,
        html=render("booking_staff_notice.html", booking=booking),
    )


def registration_denied(*, sender: str, register: "RegisterForm") -> EmailMessage:
    return EmailMessage(
        sender=sender,
        to=register.email,
        subject=REGISTRATION_DENIED_SUBJECT,
        html=render("registration_denied.html", register=register),
    )
