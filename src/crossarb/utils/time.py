"""
Time utilities.

Millisecond timestamps for quote observation times and status records.
"""

import time
from datetime import UTC, datetime


def get_timestamp_ms() -> int:
    """
    Get current timestamp in milliseconds.

    Returns:
        Current Unix timestamp in milliseconds.
    """
    return time.time_ns() // 1_000_000


def format_timestamp_ms(timestamp_ms: int) -> str:
    """
    Format a millisecond timestamp as an ISO-8601 UTC string.

    Example:
        >>> format_timestamp_ms(1704067200123)
        '2024-01-01T00:00:00.123000+00:00'
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC).isoformat()


def monotonic_ms() -> int:
    """Monotonic clock in milliseconds, for measuring durations."""
    return time.monotonic_ns() // 1_000_000
