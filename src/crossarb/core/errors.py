"""
Exception hierarchy for the arbitrage engine.

Registry errors abort a refresh, quote errors abort one quote, and
stream errors abort one websocket session. None of them escape a
detection pass.
"""

from crossarb.core.types import QuoteErrorReason


class ArbitrageError(Exception):
    """Base exception for the engine."""


# =============================================================================
# Registry
# =============================================================================


class CatalogUnavailable(ArbitrageError):
    """Aggregator token catalogue could not be loaded or lacks the quote asset."""


class ExchangeListUnavailable(ArbitrageError):
    """Exchange trading-pair list could not be loaded."""


# =============================================================================
# Quotes
# =============================================================================


class QuoteFailure(ArbitrageError):
    """Base exception for a failed aggregator quote."""

    reason: QuoteErrorReason = QuoteErrorReason.PROVIDER_ERROR


class TokenNotFound(QuoteFailure):
    """A side of the pair is missing from the token catalogue."""

    reason = QuoteErrorReason.TOKEN_NOT_FOUND


class NoRoute(QuoteFailure):
    """The aggregator reports no executable swap path."""

    reason = QuoteErrorReason.NO_ROUTE


class ProviderError(QuoteFailure):
    """Transport or response failure from the aggregator."""

    reason = QuoteErrorReason.PROVIDER_ERROR


# =============================================================================
# Streaming
# =============================================================================


class StreamConnectionError(ArbitrageError):
    """Websocket session failed or was closed by the peer."""
