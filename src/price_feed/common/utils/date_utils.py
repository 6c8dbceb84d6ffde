"""
Date Utilities
==============

Timestamp helpers for tick derivation and response payloads.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current time in UTC.

    Returns:
        Current UTC datetime
    """
    return datetime.now(UTC)


def to_iso_millis(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with millisecond precision and a ``Z`` suffix.

    Naive datetimes are assumed to be UTC.

    Examples:
        >>> to_iso_millis(datetime(2024, 1, 2, 3, 4, 5, 678900, tzinfo=UTC))
        '2024-01-02T03:04:05.678Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
