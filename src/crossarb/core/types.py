"""
Type definitions for the arbitrage engine.

This module contains the dataclasses and enums shared across the
registry, quote sources, status tracker and detector. Value objects
are frozen; the only mutable record is PairStatus, owned by the
status tracker.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from crossarb.config.constants import PERCENTAGE_PRECISION, PRICE_PRECISION
from crossarb.utils.time import format_timestamp_ms


# =============================================================================
# Enums
# =============================================================================


class QuoteSource(str, Enum):
    """Origin of a price quote."""

    AGGREGATOR = "aggregator"
    STREAM = "stream"


class QuoteErrorReason(str, Enum):
    """Why an aggregator quote could not be produced."""

    TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
    NO_ROUTE = "NO_ROUTE"
    PROVIDER_ERROR = "PROVIDER_ERROR"


class Direction(str, Enum):
    """Trade direction of an opportunity."""

    BUY_AGGREGATOR_SELL_STREAM = "buy_aggregator_sell_stream"
    BUY_STREAM_SELL_AGGREGATOR = "buy_stream_sell_aggregator"


class Confidence(str, Enum):
    """Coarse trust label derived from the raw cross-venue divergence."""

    HIGH = "high"
    MEDIUM = "medium"


class PairState(str, Enum):
    """Outcome of the most recent check of a pair."""

    CHECKED = "checked"
    ERROR = "error"


# =============================================================================
# Registry Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class Token:
    """Aggregator catalogue entry."""

    symbol: str
    address: str
    decimals: int
    name: str = ""


@dataclass(slots=True, frozen=True)
class TradingPair:
    """
    Base asset tradable on both venues against the quote asset.

    `base_asset` is the exchange's spelling of the asset and is the key
    used by the price book and the status tracker.
    """

    base_asset: str
    quote_asset: str
    exchange_symbol: str
    token_address: str
    token_symbol: str
    quote_address: str

    def to_dict(self) -> dict[str, str]:
        return {
            "base_asset": self.base_asset,
            "quote_asset": self.quote_asset,
            "symbol": self.exchange_symbol,
            "token_symbol": self.token_symbol,
            "token_mint": self.token_address,
            "quote_mint": self.quote_address,
        }


# =============================================================================
# Quote Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class PriceQuote:
    """
    Price of one base unit in quote-asset units.

    A failed quote has no value and carries the reason instead.
    """

    value: float | None
    source: QuoteSource
    observed_at_ms: int
    error: QuoteErrorReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.value is not None and self.error is None

    @classmethod
    def failed(
        cls,
        source: QuoteSource,
        reason: QuoteErrorReason,
        observed_at_ms: int,
        detail: str = "",
    ) -> "PriceQuote":
        return cls(
            value=None,
            source=source,
            observed_at_ms=observed_at_ms,
            error=reason,
            detail=detail,
        )


class AggregatorQuotes(Protocol):
    """Protocol for on-demand quote sources."""

    async def quote(self, pair: TradingPair) -> PriceQuote:
        """Return the current executable price for a pair."""
        ...


class StreamPrices(Protocol):
    """Protocol for the read side of the shared streamed price map."""

    def get(self, asset: str) -> PriceQuote | None:
        """Latest streamed quote for a base asset."""
        ...


# =============================================================================
# Opportunity Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class ArbitrageOpportunity:
    """
    Fee-adjusted cross-venue opportunity.

    Built fresh on each detection pass and never mutated.
    """

    token: str
    direction: Direction
    action: str
    aggregator_price: float
    stream_price: float
    effective_buy: float
    effective_sell: float
    profit: float
    profit_pct: float
    divergence_pct: float
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "direction": self.direction.value,
            "action": self.action,
            "profit": self.profit,
            "profit_percentage": round(self.profit_pct, PERCENTAGE_PRECISION),
            "aggregator_price": round(self.aggregator_price, PRICE_PRECISION),
            "stream_price": round(self.stream_price, PRICE_PRECISION),
            "effective_buy": round(self.effective_buy, PRICE_PRECISION),
            "effective_sell": round(self.effective_sell, PRICE_PRECISION),
            "divergence_percentage": round(self.divergence_pct, PERCENTAGE_PRECISION),
            "confidence": self.confidence.value,
        }


# =============================================================================
# Status Types
# =============================================================================


@dataclass(slots=True)
class PairStatus:
    """Most recent observation of a pair."""

    last_checked_ms: int
    state: PairState
    aggregator_price: float | None = None
    stream_price: float | None = None
    stream_age_ms: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_checked": format_timestamp_ms(self.last_checked_ms),
            "state": self.state.value,
            "aggregator_price": self.aggregator_price,
            "stream_price": self.stream_price,
            "stream_age_ms": self.stream_age_ms,
            "error": self.error,
        }


@dataclass(slots=True, frozen=True)
class PassSummary:
    """Aggregate counts of one detection pass."""

    checked: int = 0
    valid: int = 0
    errored: int = 0
    skipped: int = 0
    diverged: int = 0
    opportunities: int = 0
    started_at_ms: int = 0
    duration_ms: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "checked": self.checked,
            "valid": self.valid,
            "errored": self.errored,
            "skipped": self.skipped,
            "diverged": self.diverged,
            "opportunities": self.opportunities,
            "started_at_ms": self.started_at_ms,
            "duration_ms": self.duration_ms,
        }
