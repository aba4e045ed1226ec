"""
UTC helpers for timestamps read back from the store.

SQLite drops tzinfo on DateTime columns, so values coming out of the
database may be naive. Naive values are always UTC in this service.
"""

from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def isoformat_utc(value: datetime) -> str:
    """Render as ISO-8601 with a trailing Z, e.g. 2024-07-15T10:00:00Z"""
    return as_utc(value).isoformat().replace("+00:00", "Z")
