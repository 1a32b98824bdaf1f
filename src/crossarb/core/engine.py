"""
Main arbitrage engine orchestrator.

Wires the registry, the two quote sources, the status tracker and the
detector together, and owns their lifecycle.
"""

import asyncio
import logging
from typing import Any

from crossarb.config.settings import Settings
from crossarb.core.errors import ProviderError
from crossarb.core.retry import RetryPolicy
from crossarb.core.types import ArbitrageOpportunity, TradingPair
from crossarb.exchange.binance import BinanceClient
from crossarb.exchange.http import HttpClientError
from crossarb.exchange.jupiter import AggregatorQuoteSource, JupiterClient
from crossarb.exchange.prediction import PredictionClient
from crossarb.exchange.rate_limiter import TokenBucket
from crossarb.market.prices import PriceBook
from crossarb.market.registry import TokenRegistry
from crossarb.market.websocket import TickerStream
from crossarb.strategy.calculator import ArbitrageCalculator, VenueFees
from crossarb.strategy.opportunity import OpportunityDetector
from crossarb.telemetry.status import PairStatusTracker


logger = logging.getLogger(__name__)


class ArbitrageEngine:
    """
    Detection engine.

    Manages the complete lifecycle of:
    - Pair registry refreshes
    - The ticker stream feeding the price book
    - On-demand detection passes
    - The prediction pass-through
    """

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the engine.

        Args:
            settings: Application settings.
        """
        self._settings = settings

        self._jupiter = JupiterClient(
            quote_url=settings.aggregator_quote_url,
            tokens_url=settings.aggregator_tokens_url,
            timeout=settings.http_timeout,
            rate_limiter=TokenBucket.per_second(settings.aggregator_requests_per_second),
        )
        self._binance = BinanceClient(
            base_url=settings.exchange_rest_url,
            timeout=settings.http_timeout,
        )
        self._prediction = PredictionClient(url=settings.prediction_url)

        self.registry = TokenRegistry(
            aggregator=self._jupiter,
            exchange=self._binance,
            quote_asset=settings.quote_asset,
            quote_asset_address=settings.quote_asset_address,
            retry_policy=RetryPolicy(
                max_attempts=settings.quote_max_attempts,
                base_delay=settings.quote_retry_base_delay,
                multiplier=settings.quote_retry_multiplier,
                retry_on=(HttpClientError,),
            ),
        )

        self.prices = PriceBook()
        self.status = PairStatusTracker()

        self.aggregator = AggregatorQuoteSource(
            client=self._jupiter,
            tokens=self.registry,
            retry_policy=RetryPolicy(
                max_attempts=settings.quote_max_attempts,
                base_delay=settings.quote_retry_base_delay,
                multiplier=settings.quote_retry_multiplier,
                retry_on=(ProviderError,),
            ),
            slippage_bps=settings.slippage_bps,
        )

        self.stream = TickerStream(
            price_book=self.prices,
            pair_provider=self.current_pairs,
            url=settings.exchange_ws_url,
            quote_asset=settings.quote_asset,
            reconnect_delay=settings.reconnect_delay,
            empty_pairs_delay=settings.empty_pairs_retry_delay,
            stats_interval=settings.stream_stats_interval,
        )

        self.calculator = ArbitrageCalculator(
            aggregator_fees=VenueFees(settings.aggregator_name, settings.aggregator_fee_rate),
            exchange_fees=VenueFees(settings.exchange_name, settings.exchange_fee_rate),
            min_profit_pct=settings.min_profit_pct,
            max_divergence_pct=settings.max_price_divergence_pct,
            high_confidence_pct=settings.high_confidence_divergence_pct,
        )

        self.detector = OpportunityDetector(
            calculator=self.calculator,
            aggregator=self.aggregator,
            prices=self.prices,
            status=self.status,
            batch_size=settings.batch_size,
            batch_delay=settings.batch_delay,
            network_fee_native=settings.network_fee_native,
            native_asset=settings.native_asset,
        )

        self._refresh_lock = asyncio.Lock()

    async def start(self) -> None:
        """Load the registry and start the ticker stream."""
        logger.info("Starting arbitrage engine...")
        await self.refresh_pairs()
        self.stream.start()

    async def shutdown(self) -> None:
        """Stop the stream and close all HTTP sessions."""
        logger.info("Shutting down arbitrage engine...")
        await self.stream.stop()
        await asyncio.gather(
            self._jupiter.close(),
            self._binance.close(),
            self._prediction.close(),
            return_exceptions=True,
        )

    async def refresh_pairs(self) -> list[TradingPair]:
        """Force a registry refresh."""
        async with self._refresh_lock:
            return await self.registry.refresh()

    async def current_pairs(self) -> list[TradingPair]:
        """
        Pairs for the next pass.

        Refreshes the registry when it is empty or older than
        `registry_max_age`.
        """
        if not self._registry_stale():
            return self.registry.pairs

        async with self._refresh_lock:
            # A concurrent caller may have refreshed while we waited
            if self._registry_stale():
                return await self.registry.refresh()
            return self.registry.pairs

    def _registry_stale(self) -> bool:
        age = self.registry.age_seconds()
        return age is None or not len(self.registry) or age >= self._settings.registry_max_age

    async def find_opportunities(self) -> list[ArbitrageOpportunity]:
        """Run a detection pass over the current pairs."""
        pairs = await self.current_pairs()
        return await self.detector.detect(pairs)

    async def predict(self, symbol: str) -> Any:
        """Forward a prediction request; errors propagate to the caller."""
        return await self._prediction.predict(symbol)

    def health(self) -> dict[str, Any]:
        """Stream state, registry size and the last pass summary."""
        summary = self.detector.last_summary
        return {
            "stream_state": self.stream.state.value,
            "stream_messages": self.stream.message_count,
            "stream_sessions": self.stream.session_count,
            "stream_reconnects": self.stream.reconnect_count,
            "subscribed_streams": len(self.stream.subscribed_symbols),
            "streamed_assets": self.prices.size,
            "pairs": len(self.registry),
            "registry_age_seconds": self.registry.age_seconds(),
            "last_pass": summary.to_dict() if summary else None,
            "tracked_pairs": len(self.status),
            "status_counts": self.status.counts(),
        }

    async def __aenter__(self) -> "ArbitrageEngine":
        await self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.shutdown()
