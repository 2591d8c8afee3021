"""Compact human-readable durations (``1h 2m 3s``)."""

from __future__ import annotations

from datetime import timedelta

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def format_duration(duration: timedelta | float | int) -> str:
    """Format *duration* top-down, dropping leading zero units.

    Fractional seconds are truncated, never rounded.

    >>> format_duration(timedelta(seconds=3661))
    '1h 1m 1s'
    >>> format_duration(0)
    '0s'
    """
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    total = max(int(duration), 0)

    days = total // SECONDS_PER_DAY
    hours = (total % SECONDS_PER_DAY) // SECONDS_PER_HOUR
    minutes = (total % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    seconds = total % SECONDS_PER_MINUTE

    if days > 0:
        return f"{days}d {hours}h {minutes}m {seconds}s"
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
