"""Mock implementations for testing."""

from tests.mocks.venues import (
    MockCatalogueClient,
    MockExchangeClient,
    MockQuoteSource,
    RecordingSleep,
    StaticTokens,
    make_pair,
)
from tests.mocks.websocket import TickerServer


__all__ = [
    "MockCatalogueClient",
    "MockExchangeClient",
    "MockQuoteSource",
    "RecordingSleep",
    "StaticTokens",
    "TickerServer",
    "make_pair",
]
