"""
ISO-8601 helpers shared by the validator, the clamper and the normalizer.

Accepted input forms:
    2025-09-15T23:59:00.000-04:00   offset
    2025-09-15T23:59:00.000Z        UTC
    2025-09-15T23:59:00.000         local, read as UTC
    2025-09-15T23:59:00             local, read as UTC
    2025-09-15                      date only, midnight UTC

Fractional seconds may have 1 to 6 digits in every form that carries a time.

Output is always UTC with millisecond precision: 2025-09-16T03:59:00.000Z
"""

import re
from datetime import date, datetime
from typing import Union

from dateutil import parser as dateutil_parser
from dateutil import tz as dateutil_tz

UTC = dateutil_tz.tzutc()

ISO_WITH_OFFSET = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?[+-]\d{2}:\d{2}$")
ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?Z$")
ISO_LOCAL = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?$")
ISO_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_ACCEPTED_PATTERNS = (ISO_WITH_OFFSET, ISO_UTC, ISO_LOCAL, ISO_DATE_ONLY)

DateLike = Union[datetime, date, str]


def matches_accepted_iso_format(value: str) -> bool:
    """Check the string shape only, not whether the date exists."""
    return any(pattern.fullmatch(value) for pattern in _ACCEPTED_PATTERNS)


def parse_iso_date(value: str) -> datetime:
    """
    Parse an accepted ISO-8601 string into a timezone-aware datetime.

    Strings without an offset are read as UTC. Strings with an offset keep it,
    so the wall-clock time is still visible to callers.

    Raises:
        ValueError: If the string is not one of the accepted forms or names
            a date that does not exist (month 13, February 30, hour 24).
    """
    if not isinstance(value, str) or not matches_accepted_iso_format(value):
        raise ValueError(f"Invalid ISO 8601 date: {value!r}")

    # isoparse rolls 24:00 over to the next day
    if "T" in value and int(value[11:13]) > 23:
        raise ValueError(f"Invalid ISO 8601 date: {value!r}")

    try:
        parsed = dateutil_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid ISO 8601 date: {value!r} ({e})") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def is_valid_iso_date(value) -> bool:
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def to_utc(value: datetime) -> datetime:
    """Convert to UTC. Naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def as_datetime(value: DateLike) -> datetime:
    """
    Coerce a datetime, date or ISO string to an aware UTC datetime.

    Raises:
        TypeError: For any other type
        ValueError: For strings that are not valid ISO-8601
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, str):
        return to_utc(parse_iso_date(value))
    raise TypeError(f"Expected a date, datetime or ISO 8601 string, got {type(value).__name__}")


def format_iso(value: DateLike) -> str:
    """Format as a UTC instant with millisecond precision and a 'Z' marker."""
    dt = as_datetime(value)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}Z"
    )


def has_time_of_day(value: str) -> bool:
    """
    True when the string carries a time that is not exactly midnight.

    Date-only strings and midnight instants count as having no time of day.
    The check uses the wall clock of the string's own offset.
    """
    if "T" not in value:
        return False
    parsed = parse_iso_date(value)
    return (parsed.hour, parsed.minute, parsed.second, parsed.microsecond) != (0, 0, 0, 0)
