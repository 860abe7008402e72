"""
Timezone and datetime utilities.

Provides parsing of user-supplied timestamps into timezone-aware datetimes.
"""

from datetime import datetime

import pytz
from dateutil import parser


def make_timezone_aware(dt: datetime, timezone_str: str = "UTC") -> datetime:
    """
    Make a datetime object timezone-aware.

    Naive datetimes are taken to be local time in ``timezone_str``; aware ones
    are converted to it.

    Args:
        dt: Datetime object (may be naive or aware).
        timezone_str: Timezone string (e.g., "America/Santiago").

    Returns:
        Timezone-aware datetime object.
    """
    tz = pytz.timezone(timezone_str)

    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def parse_datetime(value: str, timezone_str: str = "UTC") -> datetime:
    """
    Parse a date/time string into a timezone-aware datetime.

    Args:
        value: Date/time string (various formats supported).
        timezone_str: Timezone for strings without an offset.

    Returns:
        Timezone-aware datetime object.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    return make_timezone_aware(parser.parse(value), timezone_str)
