"""Utility functions for the arbitrage engine."""

from crossarb.utils.time import format_timestamp_ms, get_timestamp_ms, monotonic_ms


__all__ = [
    "format_timestamp_ms",
    "get_timestamp_ms",
    "monotonic_ms",
]
