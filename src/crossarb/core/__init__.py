"""Core module containing type definitions, errors and the retry policy."""

from crossarb.core.errors import (
    ArbitrageError,
    CatalogUnavailable,
    ExchangeListUnavailable,
    NoRoute,
    ProviderError,
    QuoteFailure,
    StreamConnectionError,
    TokenNotFound,
)
from crossarb.core.retry import RetryPolicy
from crossarb.core.types import (
    ArbitrageOpportunity,
    Confidence,
    Direction,
    PairState,
    PairStatus,
    PassSummary,
    PriceQuote,
    QuoteErrorReason,
    QuoteSource,
    Token,
    TradingPair,
)


__all__ = [
    "ArbitrageError",
    "ArbitrageOpportunity",
    "CatalogUnavailable",
    "Confidence",
    "Direction",
    "ExchangeListUnavailable",
    "NoRoute",
    "PairState",
    "PairStatus",
    "PassSummary",
    "PriceQuote",
    "ProviderError",
    "QuoteErrorReason",
    "QuoteFailure",
    "QuoteSource",
    "RetryPolicy",
    "StreamConnectionError",
    "Token",
    "TokenNotFound",
    "TradingPair",
]
