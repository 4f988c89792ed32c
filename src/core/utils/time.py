"""
Time-related utilities for the application.

All timestamps are generated in UTC and serialized using
ISO-8601 format with timezone information so that they sort
lexicographically in DynamoDB range keys and in memory.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def touch_timestamp(previous: str | None) -> str:
    """Return a fresh `updated` timestamp that never precedes `previous`."""
    now = utc_now_iso()
    if previous and previous > now:
        return previous
    return now
