"""
Time helpers for exchange timestamps.

Exchanges report times as integer milliseconds since the Unix epoch.
"""

from datetime import datetime, timezone
from typing import Union


def utc_datetime_from_millis(timestamp_ms: Union[int, float, str]) -> datetime:
    """Convert an epoch timestamp in milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(int(timestamp_ms) / 1000, tz=timezone.utc)


def local_datetime_from_millis(timestamp_ms: Union[int, float, str]) -> datetime:
    """Convert an epoch timestamp in milliseconds to an aware datetime in the local timezone."""
    return utc_datetime_from_millis(timestamp_ms).astimezone()
