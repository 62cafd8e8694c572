"""
Human-readable relative timestamps ("3 hours ago").
"""

import time

MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2592000
YEAR = 31536000

_UNITS = [
    (YEAR, "year"),
    (MONTH, "month"),
    (WEEK, "week"),
    (DAY, "day"),
    (HOUR, "hour"),
    (MINUTE, "min"),
]


def now_secs() -> int:
    return int(time.time())


def format_relative(diff_secs: int) -> str:
    """Format an age in seconds, e.g. 'just now', '1 day ago', '5 mins ago'"""
    for size, unit in _UNITS:
        if diff_secs >= size:
            count = diff_secs // size
            return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"
    return "just now"


def format_timestamp(timestamp: int, now: int | None = None) -> str:
    """Format an absolute unix timestamp relative to `now` (defaults to the current time)"""
    if now is None:
        now = now_secs()
    return format_relative(now - timestamp)
