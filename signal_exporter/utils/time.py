"""
Time utilities for clock reads and duration handling.

Every signal computes from an explicit instant, so the only place that reads
the wall clock is utc_now. Tests patch it to pin time.
"""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def utc_now() -> datetime:
    """Read the wall clock as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(ts: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Args:
        ts: Aware or naive datetime; naive values are taken to be UTC

    Returns:
        The same instant with a UTC tzinfo
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def elapsed_seconds(start_time: datetime, end_time: Optional[datetime] = None) -> float:
    """
    Signed elapsed time in seconds with microsecond precision.

    Args:
        start_time: Start timestamp
        end_time: End timestamp, defaults to the current wall clock

    Returns:
        Elapsed seconds, negative when end_time precedes start_time
    """
    if end_time is None:
        end_time = utc_now()

    return (end_time - start_time).total_seconds()


def parse_duration(value: Union[str, int, float, timedelta]) -> timedelta:
    """
    Parse a duration.

    Accepts timedelta values, numbers (seconds) and strings made of one or
    more decimal numbers with unit suffixes, such as "300ms", "4s", "5m" or
    "1h30m". A leading sign applies to the whole string. A bare number string
    is read as seconds.

    Raises:
        ValueError: If the value cannot be read as a duration
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    if not isinstance(value, str):
        raise ValueError(f"invalid duration: {value!r}")

    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if not text:
        raise ValueError(f"invalid duration: {value!r}")

    try:
        total = float(text)
    except ValueError:
        total = _sum_duration_parts(text, value)

    if not math.isfinite(total):
        raise ValueError(f"invalid duration: {value!r}")

    try:
        return timedelta(seconds=sign * total)
    except OverflowError as e:
        raise ValueError(f"duration out of range: {value!r}") from e


def _sum_duration_parts(text: str, original: str) -> float:
    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            raise ValueError(f"invalid duration: {original!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position != len(text) or position == 0:
        raise ValueError(f"invalid duration: {original!r}")

    return total


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the compact form accepted by parse_duration."""
    total = value.total_seconds()
    if total == 0:
        return "0s"

    sign = "-" if total < 0 else ""
    remaining = abs(total)
    hours, remaining = divmod(remaining, 3600)
    minutes, seconds = divmod(remaining, 60)

    parts = []
    if hours:
        parts.append(f"{int(hours)}h")
    if minutes:
        parts.append(f"{int(minutes)}m")
    if seconds:
        parts.append(f"{seconds:g}s")
    return sign + "".join(parts)
