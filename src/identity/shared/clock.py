"""UTC time helpers."""

from datetime import UTC, datetime


def utc_now():
    return datetime.now(UTC)


def as_utc(value):
    """Attach UTC to naive datetimes read back from storage."""
    if value is None:
        return None
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
