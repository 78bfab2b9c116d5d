"""Datetime parsing: lax input -> timezone-aware output."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pendulum

DISPLAY_FORMAT = "%Y-%m-%d"


def parse_datetime(value: str | date | datetime, default_tz: str = "UTC") -> datetime:
    """Parse a lax front matter date into a timezone-aware datetime.

    Accepts:
    - datetime objects (naive ones get ``default_tz``)
    - date objects (midnight in ``default_tz``)
    - strings such as ``2026-01-07``, ``2026-01-07 09:30``,
      ``2026-01-07T09:30:00+09:00`` or ``January 7, 2026``

    Raises ValueError when the string cannot be parsed.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            tz = pendulum.timezone(default_tz)
            value = value.replace(tzinfo=tz)  # type: ignore[arg-type]
        return value

    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day, tz=default_tz)

    value_str = value.strip()
    if not value_str:
        raise ValueError("Empty date string")

    parsed = pendulum.parse(value_str, tz=default_tz, strict=False)
    if isinstance(parsed, pendulum.DateTime):
        return parsed
    # pendulum.parse returns Date for date-only strings
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=default_tz)
    # Time or Duration values carry no calendar date
    raise ValueError(f"Not a calendar date: {value_str!r}")


def now_utc() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 for JSON serialization."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def format_display(dt: datetime) -> str:
    """Format a post date for templates."""
    return dt.strftime(DISPLAY_FORMAT)
