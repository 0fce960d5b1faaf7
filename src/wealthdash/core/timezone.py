"""Timezone utilities; all cache timestamps are stored in UTC."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Naive datetimes come back from SQLite; they were written as UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_datetime_utc(value: str) -> Optional[datetime]:
    """
    Parse a datetime string (ISO-8601 or RFC 822) and return it in UTC.

    Returns None when the string cannot be parsed.
    """
    try:
        dt = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    return to_utc(dt)
