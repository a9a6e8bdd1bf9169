"""Millisecond clock + the fixed UTC timestamp format used by Status."""

from __future__ import annotations

import re
import time
from datetime import datetime, timezone

# yyyy-MM-dd'T'HH:mm:ssZ  →  2017-06-01T12:30:05+0000
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{4})", re.ASCII)


def current_time_millis() -> int:
    """Return the current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def millis_to_datetime(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def datetime_to_millis(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return round(value.timestamp() * 1000)


def format_timestamp(millis: int) -> str:
    dt = millis_to_datetime(millis)
    # %Y is not zero-padded below year 1000 on every platform.
    return f"{dt.year:04d}" + dt.strftime("-%m-%dT%H:%M:%S%z")


def parse_timestamp(text: str) -> int:
    """Parse a fixed-format timestamp string into epoch milliseconds.

    Raises ValueError when ``text`` does not match the format.
    """
    if not isinstance(text, str) or not _TIMESTAMP_RE.fullmatch(text):
        raise ValueError(f"'{text}' does not match {DATE_FORMAT}")
    try:
        parsed = datetime.strptime(text, DATE_FORMAT).astimezone(timezone.utc)
        millis = datetime_to_millis(parsed)
        # UTC year must stay within 1-9999 so the value formats back.
        millis_to_datetime(millis)
    except (ValueError, OverflowError, OSError) as e:
        raise ValueError(f"'{text}' is not a representable timestamp: {e}") from e
    return millis
