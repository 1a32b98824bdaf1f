"""
Unit tests for TokenBucket.
"""

import pytest

from crossarb.exchange.rate_limiter import TokenBucket


class TestTokenBucket:
    """Tests for TokenBucket."""

    def test_starts_full(self) -> None:
        bucket = TokenBucket(capacity=5, refill_rate=1.0)

        assert bucket.tokens == pytest.approx(5.0, abs=0.1)

    @pytest.mark.asyncio
    async def test_acquire_consumes(self) -> None:
        bucket = TokenBucket(capacity=3, refill_rate=0.5)

        await bucket.acquire()
        await bucket.acquire()

        assert bucket.tokens < 1.5

    @pytest.mark.asyncio
    async def test_acquire_waits_when_empty(self) -> None:
        bucket = TokenBucket(capacity=1, refill_rate=100.0)

        await bucket.acquire()
        await bucket.acquire()

        assert bucket.tokens < 1.0

    def test_per_second(self) -> None:
        bucket = TokenBucket.per_second(5.0)

        assert bucket.capacity == 5
        assert bucket.refill_rate == 5.0
        assert TokenBucket.per_second(0.5).capacity == 1

        with pytest.raises(ValueError):
            TokenBucket.per_second(0.0)
