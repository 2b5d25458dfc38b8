"""Date helpers for timestamps stored in the Messages database.

Most dates are nanosecond-precision timestamps counted from
``2001-01-01 00:00:00`` UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

TIMESTAMP_FACTOR = 1_000_000_000

_SEPARATOR = ", "
_APPLE_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class MessageError(Exception):
    """Raised when message data, such as a timestamp, is invalid."""


def get_offset() -> int:
    """Return the Unix timestamp of the database epoch, 2001-01-01 UTC."""
    return int(_APPLE_EPOCH.timestamp())


def _truncating_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def get_local_time(date_stamp: int, offset: int) -> datetime:
    """Convert a database timestamp to an aware datetime in the local zone."""
    seconds = _truncating_div(date_stamp, TIMESTAMP_FACTOR) + offset
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone()
    except (OverflowError, OSError, ValueError) as why:
        raise MessageError(f"Timestamp is invalid: {date_stamp}") from why


def format_date(date: datetime | BaseException) -> str:
    """Format a date like ``May 20, 2020  9:10:11 AM``.

    An exception in place of a date is rendered as its message.
    """
    if isinstance(date, BaseException):
        return str(date)
    hour12 = date.hour % 12 or 12
    meridiem = "AM" if date.hour < 12 else "PM"
    return (
        f"{_MONTHS[date.month - 1]} {date.day:02d}, {date.year} "
        f"{hour12:>2}:{date.minute:02d}:{date.second:02d} {meridiem}"
    )


def _plural(amount: int, unit: str) -> str:
    return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"


def readable_diff(
    start: datetime | BaseException | None,
    end: datetime | BaseException | None,
) -> str | None:
    """Describe the time between two dates, e.g. ``5 minutes, 2 seconds``.

    Returns ``None`` when either date is missing or invalid, or when ``end``
    comes before ``start``.
    """
    if not isinstance(start, datetime) or not isinstance(end, datetime):
        return None

    seconds = int((end - start).total_seconds())
    if seconds < 0:
        return None

    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = [
        _plural(amount, unit)
        for amount, unit in (
            (days, "day"),
            (hours, "hour"),
            (minutes, "minute"),
            (secs, "second"),
        )
        if amount
    ]
    return _SEPARATOR.join(parts)