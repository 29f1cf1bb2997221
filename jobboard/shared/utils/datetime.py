"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_epoch_millis(value: int) -> datetime:
    """
    Create a UTC-aware datetime from milliseconds since the Unix epoch.

    Identity provider payloads carry created_at/updated_at in this form.

    Args:
        value: Milliseconds since epoch

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.fromtimestamp(value / 1000, tz=UTC)
