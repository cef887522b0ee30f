"""Calendar helpers pinned to a single reference timezone.

Day bucketing must not depend on the server's local timezone, so every
conversion from a timestamp to a calendar day goes through REFERENCE_TZ.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

REFERENCE_TZ_NAME = "America/Los_Angeles"
REFERENCE_TZ = ZoneInfo(REFERENCE_TZ_NAME)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def reference_day(value: datetime) -> date:
    """Calendar day of a timestamp in the reference timezone."""
    return as_utc(value).astimezone(REFERENCE_TZ).date()
