from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""

    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_utc(value: datetime) -> str:
    """Fixed-width ISO-8601 UTC string; lexicographic order matches time order."""

    return ensure_utc(value).isoformat(timespec="microseconds")


def parse_datetime(value: object) -> datetime | None:
    """Parse a stored timestamp (datetime or ISO string) into an aware UTC datetime."""

    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str) and value.strip():
        try:
            return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


__all__ = ["ensure_utc", "isoformat_utc", "parse_datetime", "utcnow"]
