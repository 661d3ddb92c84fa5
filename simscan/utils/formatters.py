"""
Formatting utilities for the Similar Image Scanner.

Human-readable counts, durations and file sizes for logs and reports.
"""

from __future__ import annotations

from ..models import format_size


def format_number(n: int) -> str:
    """
    Thousands separators for counts.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_time_estimate(seconds: float) -> str:
    """
    Coarse duration: seconds, minutes+seconds, or hours+minutes.

    Examples:
        >>> format_time_estimate(45)
        '45s'
        >>> format_time_estimate(150)
        '2m 30s'
        >>> format_time_estimate(3665)
        '1h 1m'
    """
    seconds = int(seconds)
    minutes, secs = divmod(seconds, 60)
    if not minutes:
        return f"{secs}s"
    hours, minutes = divmod(minutes, 60)
    if not hours:
        return f"{minutes}m {secs}s"
    return f"{hours}h {minutes}m"


def format_duration_ms(milliseconds: int) -> str:
    """Format a scan time in milliseconds ('850ms' below one second)."""
    if milliseconds < 1000:
        return f"{int(milliseconds)}ms"
    return format_time_estimate(milliseconds / 1000)


__all__ = ['format_number', 'format_time_estimate', 'format_duration_ms', 'format_size']
