"""
Cross-venue profit calculation.

Turns a pair of raw prices into fee- and cost-adjusted opportunities.
Pure arithmetic on floats; no I/O.
"""

from dataclasses import dataclass

from crossarb.config.constants import (
    DEFAULT_AGGREGATOR_FEE_RATE,
    DEFAULT_EXCHANGE_FEE_RATE,
    DEFAULT_HIGH_CONFIDENCE_DIVERGENCE_PCT,
    DEFAULT_MAX_PRICE_DIVERGENCE_PCT,
    DEFAULT_MIN_PROFIT_PCT,
    PROFIT_PRECISION,
)
from crossarb.core.types import ArbitrageOpportunity, Confidence, Direction


@dataclass(frozen=True, slots=True)
class VenueFees:
    """
    Fee model of one venue.

    Attributes:
        name: Venue label used in action strings.
        fee_rate: Proportional taker/swap fee (e.g., 0.001 = 0.1%).
    """

    name: str
    fee_rate: float

    def effective_buy(self, price: float, fixed_cost: float = 0.0) -> float:
        """Cost of buying one unit: price inflated by the fee, plus fixed cost."""
        return price * (1.0 + self.fee_rate) + fixed_cost

    def effective_sell(self, price: float, fixed_cost: float = 0.0) -> float:
        """Proceeds of selling one unit: price deflated by the fee, minus fixed cost."""
        return price * (1.0 - self.fee_rate) - fixed_cost


def price_divergence_pct(aggregator_price: float, stream_price: float) -> float:
    """
    Raw relative divergence between the venues, in percent of the streamed price.

    Example:
        >>> round(price_divergence_pct(145.0, 100.0), 6)
        45.0
    """
    return abs(aggregator_price - stream_price) / stream_price * 100.0


class ArbitrageCalculator:
    """
    Evaluates one pair's prices against both venues' fee models.

    Features:
    - Sanity ceiling on raw divergence (filters stale or bad quotes)
    - Symmetric check of both trade directions
    - Confidence label from raw divergence
    """

    __slots__ = (
        "_aggregator",
        "_exchange",
        "_min_profit_pct",
        "_max_divergence_pct",
        "_high_confidence_pct",
    )

    def __init__(
        self,
        aggregator_fees: VenueFees | None = None,
        exchange_fees: VenueFees | None = None,
        min_profit_pct: float = DEFAULT_MIN_PROFIT_PCT,
        max_divergence_pct: float = DEFAULT_MAX_PRICE_DIVERGENCE_PCT,
        high_confidence_pct: float = DEFAULT_HIGH_CONFIDENCE_DIVERGENCE_PCT,
    ) -> None:
        """
        Initialize calculator.

        Args:
            aggregator_fees: Fee model of the aggregator venue.
            exchange_fees: Fee model of the streaming venue.
            min_profit_pct: Net profit percentage an opportunity must exceed.
            max_divergence_pct: Raw divergence above which a pair is skipped.
            high_confidence_pct: Raw divergence below which confidence is high.
        """
        self._aggregator = aggregator_fees or VenueFees("Jupiter", DEFAULT_AGGREGATOR_FEE_RATE)
        self._exchange = exchange_fees or VenueFees("Binance", DEFAULT_EXCHANGE_FEE_RATE)
        self._min_profit_pct = min_profit_pct
        self._max_divergence_pct = max_divergence_pct
        self._high_confidence_pct = high_confidence_pct

    def exceeds_sanity(self, divergence_pct: float) -> bool:
        """True if the raw divergence is too large to trust."""
        return divergence_pct > self._max_divergence_pct

    def confidence_for(self, divergence_pct: float) -> Confidence:
        return Confidence.HIGH if divergence_pct < self._high_confidence_pct else Confidence.MEDIUM

    def evaluate(
        self,
        token: str,
        aggregator_price: float,
        stream_price: float,
        aggregator_fixed_cost: float = 0.0,
    ) -> list[ArbitrageOpportunity]:
        """
        Compute opportunities for one pair.

        Args:
            token: Base asset symbol.
            aggregator_price: Raw aggregator price.
            stream_price: Raw streamed exchange price.
            aggregator_fixed_cost: Per-swap cost on the aggregator side,
                in quote-asset units.

        Returns:
            Opportunities in either direction (at most one with non-negative fees).
        """
        if aggregator_price <= 0 or stream_price <= 0:
            return []

        divergence = price_divergence_pct(aggregator_price, stream_price)
        if self.exceeds_sanity(divergence):
            return []

        confidence = self.confidence_for(divergence)

        agg_buy = self._aggregator.effective_buy(aggregator_price, aggregator_fixed_cost)
        agg_sell = self._aggregator.effective_sell(aggregator_price, aggregator_fixed_cost)
        ex_buy = self._exchange.effective_buy(stream_price)
        ex_sell = self._exchange.effective_sell(stream_price)

        candidates = (
            (Direction.BUY_STREAM_SELL_AGGREGATOR, self._exchange, ex_buy, self._aggregator, agg_sell),
            (Direction.BUY_AGGREGATOR_SELL_STREAM, self._aggregator, agg_buy, self._exchange, ex_sell),
        )

        opportunities: list[ArbitrageOpportunity] = []
        for direction, buy_venue, buy, sell_venue, sell in candidates:
            if buy <= 0:
                continue

            profit_pct = (sell - buy) / buy * 100.0
            if profit_pct <= self._min_profit_pct:
                continue

            profit = round(sell - buy, PROFIT_PRECISION)
            if profit <= 0:
                continue

            opportunities.append(
                ArbitrageOpportunity(
                    token=token,
                    direction=direction,
                    action=f"Buy on {buy_venue.name}, Sell on {sell_venue.name}",
                    aggregator_price=aggregator_price,
                    stream_price=stream_price,
                    effective_buy=buy,
                    effective_sell=sell,
                    profit=profit,
                    profit_pct=profit_pct,
                    divergence_pct=divergence,
                    confidence=confidence,
                )
            )

        return opportunities

    @property
    def min_profit_pct(self) -> float:
        return self._min_profit_pct

    @property
    def max_divergence_pct(self) -> float:
        return self._max_divergence_pct

    @property
    def aggregator_fees(self) -> VenueFees:
        return self._aggregator

    @property
    def exchange_fees(self) -> VenueFees:
        return self._exchange
