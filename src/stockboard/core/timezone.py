"""Timezone utilities for Asia/Taipei market time."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

TAIPEI_TZ = pytz.timezone("Asia/Taipei")


def now_taipei() -> datetime:
    """Return current time in Asia/Taipei timezone."""
    return datetime.now(TAIPEI_TZ)


def to_taipei(dt: datetime) -> datetime:
    """Convert a datetime to Asia/Taipei timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Taipei local time
        return TAIPEI_TZ.localize(dt)
    return dt.astimezone(TAIPEI_TZ)


def from_epoch_millis(millis: int) -> datetime:
    """Convert an epoch timestamp in milliseconds to a Taipei datetime."""
    return datetime.fromtimestamp(millis / 1000, tz=pytz.utc).astimezone(TAIPEI_TZ)


def parse_datetime_taipei(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in Asia/Taipei timezone.

    If no timezone is provided in the string, assumes Asia/Taipei.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or TAIPEI_TZ
        dt = tz.localize(dt)
    return to_taipei(dt)
