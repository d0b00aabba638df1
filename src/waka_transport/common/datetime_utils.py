from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def format_day(value: date | datetime) -> str:
    """Format a calendar day as zero-padded YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def utc_now() -> datetime:
    """Naive UTC timestamp, matching how MySQL DATETIME columns are written."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
