"""
Token bucket rate limiter for aggregator requests.

Async-compatible bucket that delays callers instead of rejecting
them, keeping concurrent quote requests under the provider's limit.
"""

import asyncio
from dataclasses import dataclass, field

from crossarb.utils.time import monotonic_ms


@dataclass
class TokenBucket:
    """
    Token bucket implementation for rate limiting.

    Tokens are added at a constant rate up to a maximum capacity.
    Each request consumes one token.
    """

    capacity: int
    refill_rate: float  # tokens per second
    tokens: float = field(init=False)
    last_refill: int = field(init=False)  # milliseconds
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize with full bucket."""
        self.tokens = float(self.capacity)
        self.last_refill = monotonic_ms()

    @classmethod
    def per_second(cls, rate: float) -> "TokenBucket":
        """Bucket admitting `rate` requests per second, with a one-second burst."""
        if rate <= 0:
            raise ValueError("rate must be positive")
        return cls(capacity=max(1, int(rate)), refill_rate=rate)

    def _refill(self) -> None:
        """Add tokens based on elapsed time."""
        now = monotonic_ms()
        elapsed_seconds = (now - self.last_refill) / 1000.0

        self.tokens = min(
            self.capacity,
            self.tokens + (elapsed_seconds * self.refill_rate),
        )
        self.last_refill = now

    async def acquire(self, tokens: int = 1) -> None:
        """
        Acquire tokens, waiting if necessary.

        Args:
            tokens: Number of tokens to acquire.
        """
        async with self._lock:
            self._refill()

            if self.tokens < tokens:
                wait_seconds = (tokens - self.tokens) / self.refill_rate
                await asyncio.sleep(wait_seconds)
                self._refill()

            self.tokens -= tokens
