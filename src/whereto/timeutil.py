"""UTC helpers; SQLite hands back naive datetimes that are implicitly UTC."""

from __future__ import annotations

from datetime import date, datetime, timezone


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def epoch_ms(dt: datetime) -> int:
    """Milliseconds since the Unix epoch (the client's ``savedAt`` unit)."""
    return int(as_utc(dt).timestamp() * 1000)


def utc_day(dt: datetime) -> date:
    """UTC calendar date of a timestamp."""
    return as_utc(dt).date()
