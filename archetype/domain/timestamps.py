"""Shared timestamp formatting helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def domain_format_rfc3339_utc(moment: datetime) -> str:
    """Format a timestamp as second-precision UTC RFC3339.

    Args:
        moment: Timestamp to format. Naive values are treated as UTC.

    Returns:
        str: Timestamp such as `2024-01-02T03:04:05Z`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def domain_format_uptime(elapsed: timedelta) -> str:
    """Format an elapsed duration rounded to whole seconds, e.g. `1h2m3s`.

    Args:
        elapsed: Duration to format. Negative values are clamped to zero.

    Returns:
        str: Compact duration label.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    total_seconds = max(0, int(round(elapsed.total_seconds())))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"
