"""Datetime utilities with consistent local-naive handling.

Due dates are stored without a UTC offset and are interpreted in the
process's local timezone both when they are written and when they are read.
These helpers keep every datetime that enters a Task in that form.
"""

from datetime import datetime
from typing import Optional


def now_local() -> datetime:
    """Return the current local time as a naive datetime.

    Returns:
        Current local datetime without tzinfo
    """
    return datetime.now()


def to_local_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert a datetime to naive local time.

    Aware datetimes are shifted into the local timezone before the offset
    is dropped. Naive datetimes are assumed to already be local.

    Args:
        dt: Datetime to convert, or None

    Returns:
        Naive local datetime, or None if input was None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt

    return dt.astimezone().replace(tzinfo=None)


def to_iso_string(dt: datetime) -> str:
    """Convert a datetime to an ISO string without a UTC offset."""
    return to_local_naive(dt).isoformat()


def parse_iso_string(value: str) -> datetime:
    """Parse an ISO-8601 string into a naive local datetime.

    Raises:
        TypeError: If value is not a string
        ValueError: If value is not a valid ISO-8601 datetime
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected an ISO datetime string, got {type(value).__name__}")
    return to_local_naive(datetime.fromisoformat(value.strip()))
