"""Telemetry module for logging and pair status."""

from crossarb.telemetry.logger import AsyncLogger, setup_logging
from crossarb.telemetry.status import PairStatusTracker


__all__ = [
    "AsyncLogger",
    "PairStatusTracker",
    "setup_logging",
]
