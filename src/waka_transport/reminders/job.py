from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ..bookings.repository import BookingRepository
from ..common.datetime_utils import format_day, now_local
from ..notifications import templates
from ..notifications.mailer import Mailer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderRunResult:
    date: str
    scanned: int
    sent: int
    failed: int
    aborted: bool = False


class ReminderJob:
    """One pass of the daily reminder: e-mail every booking dated today.

    Each booking is attempted independently; a failed send is logged and the
    scan moves on. A failed booking lookup ends the run with ``aborted=True``.
    Nothing is written back, so running twice on the same day sends twice.
    """

    def __init__(
        self,
        bookings: BookingRepository,
        mailer: Mailer,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._bookings = bookings
        self._mailer = mailer
        self._clock = clock

    def run(self) -> ReminderRunResult:
        today = format_day(self._clock())
        logger.info("Reminder run started for %s", today)

        try:
            bookings = list(self._bookings.list_by_date(today))
        except Exception:
            logger.exception("Could not load bookings for %s, reminder run aborted", today)
            return ReminderRunResult(date=today, scanned=0, sent=0, failed=0, aborted=True)

        sent = failed = 0
        for booking in bookings:
            try:
                receipt = self._mailer.send(templates.booking_reminder(sender=self._mailer.sender, booking=booking))
                sent += 1
                logger.info("Reminder for booking %s sent: %s", booking.booking_id, receipt.response)
            except Exception:
                failed += 1
                logger.exception("Reminder for booking %s failed", booking.booking_id)

        result = ReminderRunResult(date=today, scanned=len(bookings), sent=sent, failed=failed)
        logger.info("Reminder run finished for %s: %s sent, %s failed", today, sent, failed)
        return result
