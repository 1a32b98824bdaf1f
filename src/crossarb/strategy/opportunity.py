"""
Detection pass over the pair registry.

Walks the pairs in fixed-size batches, fetching aggregator quotes
concurrently within a batch while reading streamed prices from the
shared price book, and returns fee-adjusted opportunities sorted by
profit percentage.
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence
from enum import Enum

from crossarb.config.constants import (
    DEFAULT_BATCH_DELAY,
    DEFAULT_BATCH_SIZE,
    DEFAULT_NATIVE_ASSET,
)
from crossarb.core.retry import SleepFunc
from crossarb.core.types import (
    AggregatorQuotes,
    ArbitrageOpportunity,
    PassSummary,
    StreamPrices,
    TradingPair,
)
from crossarb.strategy.calculator import ArbitrageCalculator, price_divergence_pct
from crossarb.telemetry.status import PairStatusTracker
from crossarb.utils.time import get_timestamp_ms, monotonic_ms


logger = logging.getLogger(__name__)


class PairOutcome(str, Enum):
    """How a pair ended within one pass."""

    VALID = "valid"
    ERRORED = "errored"
    SKIPPED = "skipped"
    DIVERGED = "diverged"


class OpportunityDetector:
    """
    Orchestrates a detection pass.

    Owns no durable state besides the last pass summary: reads pairs,
    aggregator quotes and streamed prices, writes pair statuses, and
    returns fresh opportunity objects.
    """

    def __init__(
        self,
        calculator: ArbitrageCalculator,
        aggregator: AggregatorQuotes,
        prices: StreamPrices,
        status: PairStatusTracker,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
        network_fee_native: float = 0.0,
        native_asset: str = DEFAULT_NATIVE_ASSET,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialize detector.

        Args:
            calculator: Fee-adjusted profit calculator.
            aggregator: On-demand quote source.
            prices: Read side of the streamed price book.
            status: Tracker receiving one record per checked pair.
            batch_size: Pairs quoted concurrently per batch.
            batch_delay: Pause between batches in seconds.
            network_fee_native: Per-swap aggregator network cost in native units.
            native_asset: Asset whose streamed price converts that cost.
            sleep: Awaitable sleep, replaceable in tests.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self._calculator = calculator
        self._aggregator = aggregator
        self._prices = prices
        self._status = status
        self._batch_size = batch_size
        self._batch_delay = batch_delay
        self._network_fee_native = network_fee_native
        self._native_asset = native_asset
        self._sleep = sleep
        self._last_summary: PassSummary | None = None

    async def detect(self, pairs: Sequence[TradingPair]) -> list[ArbitrageOpportunity]:
        """
        Run one detection pass.

        Never raises for per-pair failures; those are recorded in the
        status tracker and counted in the pass summary.

        Returns:
            Opportunities sorted by profit percentage, best first.
        """
        started_at = get_timestamp_ms()
        start = monotonic_ms()
        outcomes: Counter[PairOutcome] = Counter()
        opportunities: list[ArbitrageOpportunity] = []

        logger.info(f"Starting arbitrage calculation for {len(pairs)} pairs")

        for i in range(0, len(pairs), self._batch_size):
            batch = pairs[i : i + self._batch_size]

            results = await asyncio.gather(*(self._check_pair(pair) for pair in batch))

            for outcome, found in results:
                outcomes[outcome] += 1
                opportunities.extend(found)

            if i + self._batch_size < len(pairs):
                await self._sleep(self._batch_delay)

        opportunities.sort(key=lambda o: o.profit_pct, reverse=True)

        summary = PassSummary(
            checked=len(pairs),
            valid=outcomes[PairOutcome.VALID],
            errored=outcomes[PairOutcome.ERRORED],
            skipped=outcomes[PairOutcome.SKIPPED] + outcomes[PairOutcome.DIVERGED],
            diverged=outcomes[PairOutcome.DIVERGED],
            opportunities=len(opportunities),
            started_at_ms=started_at,
            duration_ms=monotonic_ms() - start,
        )
        self._last_summary = summary

        logger.info(
            f"Pass complete: valid={summary.valid} errored={summary.errored} "
            f"skipped={summary.skipped} (diverged={summary.diverged}) "
            f"opportunities={summary.opportunities} in {summary.duration_ms}ms"
        )

        return opportunities

    async def _check_pair(
        self,
        pair: TradingPair,
    ) -> tuple[PairOutcome, list[ArbitrageOpportunity]]:
        """Quote, record and evaluate a single pair."""
        token = pair.base_asset

        try:
            quote = await self._aggregator.quote(pair)

            now = get_timestamp_ms()
            streamed = self._prices.get(token)
            stream_price = streamed.value if streamed else None
            stream_age = now - streamed.observed_at_ms if streamed else None

            if not quote.ok:
                reason = quote.error.value if quote.error else "UNKNOWN"
                self._status.record(
                    token,
                    stream_price=stream_price,
                    stream_age_ms=stream_age,
                    error=reason,
                    checked_at_ms=now,
                )
                logger.info(f"{token}: {pair.token_symbol} quote error - {reason} {quote.detail}")
                return PairOutcome.ERRORED, []

            aggregator_price = quote.value or 0.0
            self._status.record(
                token,
                aggregator_price=aggregator_price,
                stream_price=stream_price,
                stream_age_ms=stream_age,
                checked_at_ms=now,
            )

            if stream_price is None:
                logger.debug(f"{token}: no streamed price available")
                return PairOutcome.SKIPPED, []

            divergence = price_divergence_pct(aggregator_price, stream_price)
            if self._calculator.exceeds_sanity(divergence):
                logger.info(
                    f"{token}: price difference {divergence:.2f}% "
                    f"(aggregator: {aggregator_price:.4f}, stream: {stream_price:.4f})"
                )
                return PairOutcome.DIVERGED, []

            fixed_cost = self._network_cost()
            if fixed_cost is None:
                logger.debug(f"{token}: no {self._native_asset} price to convert network fee")
                return PairOutcome.SKIPPED, []

            logger.debug(
                f"{token}: valid prices - aggregator: {aggregator_price:.4f}, "
                f"stream: {stream_price:.4f}"
            )
            found = self._calculator.evaluate(token, aggregator_price, stream_price, fixed_cost)
            return PairOutcome.VALID, found

        except Exception as e:
            logger.exception(f"Error processing {token}")
            self._status.record(token, error=str(e) or type(e).__name__)
            return PairOutcome.ERRORED, []

    def _network_cost(self) -> float | None:
        """Aggregator network fee in quote units, or None if it cannot be priced."""
        if self._network_fee_native <= 0:
            return 0.0

        reference = self._prices.get(self._native_asset)
        if reference is None or not reference.value:
            return None

        return self._network_fee_native * reference.value

    @property
    def last_summary(self) -> PassSummary | None:
        """Summary of the most recent completed pass."""
        return self._last_summary

    @property
    def batch_size(self) -> int:
        return self._batch_size
