"""Time utilities for the domain layer."""

from calendar import monthrange
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def months_ago(dt: datetime, months: int) -> datetime:
    """Shift a datetime back by calendar months, clamping the day.

    31 March minus one month is 28/29 February, not 3 March.
    """
    month_index = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def start_of_month(dt: datetime) -> datetime:
    """Midnight on the first day of dt's month, keeping dt's tzinfo."""
    return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
