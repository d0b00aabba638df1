"""Background scheduler that fires the booking reminder job once a day."""
from __future__ import annotations

import logging
import threading
from typing import Optional

import schedule

from ..core.constants import DEFAULT_REMINDER_TIME
from .job import ReminderJob, ReminderRunResult

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Run ``ReminderJob`` daily at ``at`` (local HH:MM) on a daemon thread.

    Uses its own ``schedule.Scheduler`` so jobs registered elsewhere in the
    process are unaffected. At most one run is in flight; a trigger that lands
    while a run is active is skipped.
    """

    def __init__(self, job: ReminderJob, *, at: str = DEFAULT_REMINDER_TIME, poll_seconds: float = 30.0):
        self._job = job
        self._at = at
        self._poll_seconds = poll_seconds
        self._scheduler = schedule.Scheduler()
        self._run_lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._scheduled: Optional[schedule.Job] = None

    @property
    def jobs(self) -> list[schedule.Job]:
        return list(self._scheduler.get_jobs())

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _trigger(self) -> None:
        # schedule treats a returned CancelJob as cancellation; return None always.
        self.run_now()

    def run_now(self) -> Optional[ReminderRunResult]:
        """Run once synchronously; returns None when another run is in flight."""
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Reminder run already in progress, trigger skipped")
            return None
        try:
            return self._job.run()
        except Exception:
            logger.exception("Reminder run crashed")
            return None
        finally:
            self._run_lock.release()

    def _loop(self) -> None:
        logger.info("Reminder scheduler loop started")
        while not self._stop.is_set():
            try:
                self._scheduler.run_pending()
            except Exception:
                logger.exception("Error in reminder scheduler loop")
            self._stop.wait(self._poll_seconds)
        logger.info("Reminder scheduler loop stopped")

    def start(self) -> None:
        if self.running:
            logger.warning("Reminder scheduler already running")
            return

        self._scheduled = self._scheduler.every().day.at(self._at).do(self._trigger)
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True, name="reminder-scheduler")
        self._thread.start()
        logger.info("Reminder scheduler started, daily at %s", self._at)

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                # still inside a run; the loop exits once it returns
                logger.warning("Reminder scheduler thread did not stop within %ss", timeout)
            else:
                self._thread = None
        if self._scheduled is not None:
            self._scheduler.cancel_job(self._scheduled)
            self._scheduled = None
        self._scheduler.clear()
        logger.info("Reminder scheduler stopped and cleared")
