"""
Mock venue clients and quote sources for testing.

Simulate the aggregator catalogue, the exchange symbol list and the
on-demand quote source without network calls.
"""

import asyncio
from typing import Any

from crossarb.config.constants import USDC_MINT_ADDRESS
from crossarb.core.types import (
    PriceQuote,
    QuoteErrorReason,
    QuoteSource,
    Token,
    TradingPair,
)
from crossarb.exchange.models import CatalogueToken, SymbolData
from crossarb.utils.time import get_timestamp_ms


def make_pair(
    base: str,
    token_symbol: str | None = None,
    quote: str = "USDC",
) -> TradingPair:
    """Build a pair with predictable symbols and addresses."""
    return TradingPair(
        base_asset=base,
        quote_asset=quote,
        exchange_symbol=f"{base}{quote}",
        token_address=f"{(token_symbol or base).lower()}-mint",
        token_symbol=token_symbol or base,
        quote_address=USDC_MINT_ADDRESS,
    )


class RecordingSleep:
    """Sleep replacement that records requested delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class MockQuoteSource:
    """
    Aggregator quote source with fixed answers per base asset.

    A float answer is returned as a price, a QuoteErrorReason as a failed
    quote, and an exception instance is raised. Unknown assets fail with
    TOKEN_NOT_FOUND.
    """

    def __init__(
        self,
        answers: dict[str, float | QuoteErrorReason | Exception] | None = None,
        latency: float = 0.0,
    ) -> None:
        self.answers = dict(answers or {})
        self.latency = latency
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def quote(self, pair: TradingPair) -> PriceQuote:
        self.calls.append(pair.base_asset)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)

            answer = self.answers.get(pair.base_asset, QuoteErrorReason.TOKEN_NOT_FOUND)
            if isinstance(answer, Exception):
                raise answer
            if isinstance(answer, QuoteErrorReason):
                return PriceQuote.failed(QuoteSource.AGGREGATOR, answer, get_timestamp_ms())
            return PriceQuote(
                value=answer,
                source=QuoteSource.AGGREGATOR,
                observed_at_ms=get_timestamp_ms(),
            )
        finally:
            self.in_flight -= 1


class StaticTokens:
    """Token lookup backed by a fixed list."""

    def __init__(self, tokens: list[Token]) -> None:
        self._by_address = {t.address: t for t in tokens}

    def token_by_address(self, address: str) -> Token | None:
        return self._by_address.get(address)


class MockCatalogueClient:
    """Aggregator client serving a fixed token catalogue."""

    def __init__(
        self,
        entries: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
        latency: float = 0.0,
    ) -> None:
        self.entries = entries or []
        self.error = error
        self.latency = latency
        self.calls = 0

    async def get_tokens(self) -> list[CatalogueToken]:
        self.calls += 1
        if self.latency:
            await asyncio.sleep(self.latency)
        if self.error is not None:
            raise self.error
        return [CatalogueToken.model_validate(e) for e in self.entries]


class MockExchangeClient:
    """Exchange client serving a fixed symbol list."""

    def __init__(
        self,
        bases: list[str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.bases = bases or []
        self.error = error
        self.calls = 0

    async def get_quoted_symbols(self, quote_asset: str) -> list[SymbolData]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [
            SymbolData.model_validate(
                {
                    "symbol": f"{base}{quote_asset}",
                    "status": "TRADING",
                    "baseAsset": base,
                    "quoteAsset": quote_asset,
                }
            )
            for base in self.bases
        ]
