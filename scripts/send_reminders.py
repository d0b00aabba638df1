"""Send today's booking reminders once, outside the web process (e.g. from cron)."""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from waka_transport.container import build_container
from waka_transport.main import LOG_FORMAT
from waka_transport.reminders.scheduler import ReminderScheduler
from waka_transport.settings import get_settings_module


def main() -> int:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    result = ReminderScheduler(container.reminder_job, at=settings.REMINDER_TIME).run_now()
    if result is None or result.aborted:
        return 1
    print(f"OK: {result.date} scanned={result.scanned} sent={result.sent} failed={result.failed}")
    return 0 if result.failed == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
