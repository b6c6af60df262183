"""
Timestamp helpers for the dashboard.

All persisted timestamps are integer milliseconds since the Unix epoch.
"""

import time
from datetime import datetime
from typing import Optional

from .constants import HOURS_PER_DAY, MS_PER_HOUR, MS_PER_SECOND


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * MS_PER_SECOND)


def _to_datetime(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp / MS_PER_SECOND)


def format_timestamp(timestamp: int, now: Optional[int] = None) -> str:
    """
    Format an activity timestamp for display.

    Timestamps from the last 24 hours show the clock time, older ones
    show the calendar date.

    Args:
        timestamp: Epoch milliseconds to format
        now: Reference time in epoch milliseconds. Defaults to now_ms().

    Returns:
        e.g. "02:05:09 PM" or "Mar 4, 2025"
    """
    if now is None:
        now = now_ms()
    moment = _to_datetime(timestamp)
    hours_ago = (now - timestamp) / MS_PER_HOUR

    if hours_ago < HOURS_PER_DAY:
        return moment.strftime("%I:%M:%S %p")
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_last_active(timestamp: int, now: Optional[int] = None) -> str:
    """
    Describe how long ago the user was last active.

    Args:
        timestamp: Epoch milliseconds of last activity
        now: Reference time in epoch milliseconds. Defaults to now_ms().

    Returns:
        "Just now", "N hour(s) ago" or "N day(s) ago"
    """
    if now is None:
        now = now_ms()
    hours_ago = (now - timestamp) / MS_PER_HOUR

    if hours_ago < 1:
        return "Just now"
    if hours_ago < HOURS_PER_DAY:
        hours = int(hours_ago)
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    days = int(hours_ago // HOURS_PER_DAY)
    return f"{days} day{'s' if days > 1 else ''} ago"
