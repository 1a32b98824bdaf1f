"""
Token/pair registry.

Joins the aggregator's token catalogue with the exchange's stablecoin
pairs. Only catalogue symbols are normalized: exchange base assets are
used as listed, so a ticker such as WAVES is never read as a wrapped AVES.
The result is cached until the next explicit `refresh()`.
"""

import logging
from collections.abc import Iterable

from crossarb.core.errors import CatalogUnavailable, ExchangeListUnavailable
from crossarb.core.retry import RetryPolicy
from crossarb.core.types import Token, TradingPair
from crossarb.exchange.binance import BinanceClient
from crossarb.exchange.http import HttpClientError
from crossarb.exchange.jupiter import JupiterClient
from crossarb.exchange.models import SymbolData
from crossarb.market.symbols import normalize_symbol
from crossarb.utils.time import get_timestamp_ms


logger = logging.getLogger(__name__)


def _index_catalogue(tokens: Iterable[Token]) -> tuple[dict[str, Token], dict[str, Token]]:
    """
    Index catalogue tokens by upper-cased symbol and by normalized symbol.

    The first token seen wins on either index.
    """
    exact: dict[str, Token] = {}
    unwrapped: dict[str, Token] = {}
    for token in tokens:
        raw = token.symbol.strip().upper()
        exact.setdefault(raw, token)
        unwrapped.setdefault(normalize_symbol(raw), token)
    return exact, unwrapped


class TokenRegistry:
    """
    Canonical pair set shared by the detector and the ticker stream.

    The registry is the sole writer of the pair snapshot. A refresh
    replaces the snapshot wholesale; nothing expires on its own.
    """

    def __init__(
        self,
        aggregator: JupiterClient,
        exchange: BinanceClient,
        quote_asset: str,
        quote_asset_address: str,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            aggregator: Client for the aggregator token catalogue.
            exchange: Client for the exchange symbol list.
            quote_asset: Stablecoin symbol (e.g., "USDC").
            quote_asset_address: Aggregator mint of the stablecoin.
            retry_policy: Backoff policy for catalogue loads.
        """
        self._aggregator = aggregator
        self._exchange = exchange
        self._quote_asset = quote_asset.upper()
        self._quote_address = quote_asset_address
        self._retry = retry_policy or RetryPolicy(retry_on=(HttpClientError,))

        self._tokens_by_address: dict[str, Token] = {}
        self._pairs: tuple[TradingPair, ...] = ()
        self._refreshed_at_ms: int | None = None

    # =========================================================================
    # Loading
    # =========================================================================

    async def load_catalogue(self) -> tuple[dict[str, Token], Token]:
        """
        Load the aggregator catalogue.

        Returns:
            Tokens by address, and the quote-asset token.

        Raises:
            CatalogUnavailable: Provider unreachable after retry, or the
                quote asset is missing from the catalogue.
        """
        try:
            entries = await self._retry.run(
                self._aggregator.get_tokens, description="token catalogue"
            )
        except HttpClientError as e:
            raise CatalogUnavailable(f"Token catalogue unavailable: {e}") from e

        tokens: dict[str, Token] = {}
        for entry in entries:
            tokens[entry.address] = Token(
                symbol=entry.symbol,
                address=entry.address,
                decimals=entry.decimals,
                name=entry.name,
            )

        quote_token = tokens.get(self._quote_address)
        if quote_token is None:
            quote_token = next(
                (t for t in tokens.values() if t.symbol.upper() == self._quote_asset),
                None,
            )
        if quote_token is None:
            raise CatalogUnavailable(f"{self._quote_asset} not found in token catalogue")

        logger.info(f"Loaded {len(tokens)} aggregator tokens")
        return tokens, quote_token

    async def load_exchange_symbols(self) -> list[SymbolData]:
        """
        Load exchange symbols quoted in the stablecoin.

        Raises:
            ExchangeListUnavailable: The symbol list could not be fetched.
        """
        try:
            symbols = await self._retry.run(
                lambda: self._exchange.get_quoted_symbols(self._quote_asset),
                description="exchange symbols",
            )
        except HttpClientError as e:
            raise ExchangeListUnavailable(f"Exchange pair list unavailable: {e}") from e

        logger.info(f"Loaded {len(symbols)} exchange {self._quote_asset} pairs")
        return symbols

    # =========================================================================
    # Refresh
    # =========================================================================

    async def refresh(self) -> list[TradingPair]:
        """
        Re-fetch both lists and rebuild the pair set.

        Registry-level failures are logged and produce an empty set so
        downstream components degrade to "no pairs".
        """
        try:
            tokens, quote_token = await self.load_catalogue()
            symbols = await self.load_exchange_symbols()
        except (CatalogUnavailable, ExchangeListUnavailable) as e:
            logger.error(f"Registry refresh failed: {e}")
            self._replace(tokens={}, pairs=())
            return []

        pairs = self.join(tokens.values(), quote_token, symbols)
        self._replace(tokens=tokens, pairs=tuple(pairs))

        logger.info(f"Found {len(pairs)} matched pairs")
        if pairs:
            logger.debug(f"Sample matched pair: {pairs[0]}")

        return pairs

    def join(
        self,
        tokens: Iterable[Token],
        quote_token: Token,
        symbols: Iterable[SymbolData],
    ) -> list[TradingPair]:
        """
        Match exchange base assets to catalogue tokens.

        A catalogue token whose symbol equals the base asset outright is
        preferred; otherwise a token whose normalized symbol equals it
        (wBTC for BTC) is used. Unmatched entries on either side are
        dropped, and the exchange spelling keys the pair.
        """
        exact, unwrapped = _index_catalogue(
            t for t in tokens if t.address != quote_token.address
        )

        pairs: list[TradingPair] = []
        seen: set[str] = set()
        for symbol in symbols:
            base_asset = symbol.base_asset.strip().upper()
            if base_asset in seen:
                continue

            token = exact.get(base_asset) or unwrapped.get(base_asset)
            if token is None:
                continue

            seen.add(base_asset)
            pairs.append(
                TradingPair(
                    base_asset=base_asset,
                    quote_asset=self._quote_asset,
                    exchange_symbol=symbol.symbol,
                    token_address=token.address,
                    token_symbol=token.symbol,
                    quote_address=quote_token.address,
                )
            )

        return pairs

    def _replace(
        self,
        tokens: dict[str, Token],
        pairs: tuple[TradingPair, ...],
    ) -> None:
        self._tokens_by_address = tokens
        self._pairs = pairs
        self._refreshed_at_ms = get_timestamp_ms()

    # =========================================================================
    # Lookups
    # =========================================================================

    def token_by_address(self, address: str) -> Token | None:
        """Catalogue entry for an aggregator address."""
        return self._tokens_by_address.get(address)

    @property
    def pairs(self) -> list[TradingPair]:
        """Pairs from the last refresh."""
        return list(self._pairs)

    def age_seconds(self) -> float | None:
        """Seconds since the last refresh."""
        if self._refreshed_at_ms is None:
            return None
        return (get_timestamp_ms() - self._refreshed_at_ms) / 1000.0

    def __len__(self) -> int:
        return len(self._pairs)
