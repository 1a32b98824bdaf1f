"""
Bounded retry with exponential backoff.

One policy object shared by every call site that retries: aggregator
quotes, catalogue loads and the stream's reconnect interval (with a
multiplier of 1 for a constant delay).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """
    Retry configuration.

    Attributes:
        max_attempts: Total attempts including the first call.
        base_delay: Delay before the second attempt, in seconds.
        multiplier: Factor applied to the delay after each failed attempt.
        retry_on: Exception types that are retried; anything else propagates.
        sleep: Awaitable sleep, replaceable in tests.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    sleep: SleepFunc = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.multiplier < 1:
            raise ValueError("delays must be non-negative and non-shrinking")

    def delay_for(self, attempt: int) -> float:
        """Delay after the given (1-based) failed attempt."""
        return self.base_delay * self.multiplier ** (max(attempt, 1) - 1)

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        description: str = "operation",
    ) -> T:
        """
        Call `operation` until it succeeds or attempts run out.

        Raises:
            The last exception raised by `operation`.
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except self.retry_on as e:
                if attempt >= self.max_attempts:
                    raise
                delay = self.delay_for(attempt)
                logger.debug(
                    f"Retry attempt {attempt}/{self.max_attempts} for {description} "
                    f"in {delay:.2f}s: {e}"
                )
                await self.sleep(delay)
                attempt += 1
