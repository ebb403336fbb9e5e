"""Local-time helpers shared by the parser and the organizer.

All datetimes handled here are naive and interpreted in the local zone.
Persisted instants are integer epoch milliseconds.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def to_epoch_ms(value: datetime) -> int:
    """Convert a naive local datetime to epoch milliseconds."""
    return int(round(value.timestamp() * 1000))


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds to a naive local datetime."""
    return datetime.fromtimestamp(value / 1000)


def now_local() -> datetime:
    return datetime.now()


def now_ms() -> int:
    return to_epoch_ms(now_local())


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999_000)


def at_time(value: datetime, hour: int, minute: int = 0) -> datetime:
    """Same calendar date as *value* at ``hour:minute:00.000``."""
    return value.replace(hour=hour, minute=minute, second=0, microsecond=0)


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def format_due(value: int | None) -> str:
    """Short display form of a due instant, e.g. ``Mar 05, 03:00 PM``."""
    if not value:
        return ""
    return from_epoch_ms(value).strftime("%b %d, %I:%M %p")


def to_utc_iso(value: int) -> str:
    """UTC ISO-8601 form with milliseconds, e.g. ``2024-06-06T13:00:00.000Z``."""
    instant = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")
