"""
Jupiter aggregator client and on-demand quote source.

The client speaks the token-list and swap-quote endpoints. The quote
source turns a routed swap quote for one whole base unit into a price,
retrying transient provider failures with backoff and converting every
failure into a tagged PriceQuote.
"""

import logging
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from crossarb.config.constants import (
    DEFAULT_SLIPPAGE_BPS,
    JUPITER_QUOTE_URL,
    JUPITER_TOKENS_URL,
    NO_ROUTE_ERROR_CODES,
)
from crossarb.core.errors import NoRoute, ProviderError, QuoteFailure
from crossarb.core.retry import RetryPolicy
from crossarb.core.types import PriceQuote, QuoteErrorReason, QuoteSource, Token, TradingPair
from crossarb.exchange.http import HttpAPIError, HttpClient, HttpClientError
from crossarb.exchange.models import CatalogueToken, SwapQuote
from crossarb.exchange.rate_limiter import TokenBucket
from crossarb.utils.time import get_timestamp_ms


logger = logging.getLogger(__name__)


def _is_no_route(payload: Any) -> bool:
    """Check an error payload for one of Jupiter's no-route codes."""
    if not isinstance(payload, dict):
        return False
    code = str(payload.get("errorCode") or "")
    if code in NO_ROUTE_ERROR_CODES:
        return True
    message = str(payload.get("error") or "").lower()
    return "no route" in message or "could not find any route" in message


class JupiterClient(HttpClient):
    """Jupiter token catalogue and quote endpoints."""

    def __init__(
        self,
        quote_url: str = JUPITER_QUOTE_URL,
        tokens_url: str = JUPITER_TOKENS_URL,
        timeout: float = 10.0,
        rate_limiter: TokenBucket | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            quote_url: Swap quote endpoint.
            tokens_url: Token catalogue endpoint.
            timeout: Total request timeout in seconds.
            rate_limiter: Optional bucket shared by all quote calls.
            session: Optional externally owned session.
        """
        super().__init__(timeout=timeout, session=session)
        self._quote_url = quote_url
        self._tokens_url = tokens_url
        self._rate_limiter = rate_limiter

    async def get_tokens(self) -> list[CatalogueToken]:
        """
        Fetch the full token catalogue.

        Malformed entries are dropped.

        Raises:
            HttpClientError: On transport errors or a non-list payload.
        """
        data = await self._get_json(self._tokens_url)
        if not isinstance(data, list):
            raise HttpClientError("Unexpected token catalogue payload")

        tokens: list[CatalogueToken] = []
        dropped = 0
        for item in data:
            try:
                tokens.append(CatalogueToken.model_validate(item))
            except ValidationError:
                dropped += 1

        if dropped:
            logger.debug(f"Dropped {dropped} malformed catalogue entries")
        return tokens

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    ) -> SwapQuote:
        """
        Request a routed swap quote.

        Args:
            input_mint: Mint of the asset sold.
            output_mint: Mint of the asset received.
            amount: Input amount in the input asset's smallest units.
            slippage_bps: Maximum slippage tolerance in basis points.

        Raises:
            NoRoute: The provider has no executable path.
            ProviderError: Any other transport or response failure.
        """
        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        params = {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": str(amount),
            "slippageBps": str(slippage_bps),
        }

        try:
            data = await self._get_json(self._quote_url, params=params)
        except HttpAPIError as e:
            if _is_no_route(e.payload):
                raise NoRoute(str(e)) from e
            raise ProviderError(str(e)) from e
        except HttpClientError as e:
            raise ProviderError(str(e)) from e

        if isinstance(data, dict) and data.get("error"):
            if _is_no_route(data):
                raise NoRoute(str(data["error"]))
            raise ProviderError(str(data["error"]))

        try:
            quote = SwapQuote.model_validate(data)
        except ValidationError as e:
            raise ProviderError(f"Unexpected quote payload: {e}") from e

        if not quote.out_amount:
            raise NoRoute("Quote carries no output amount")

        return quote


class TokenLookup(Protocol):
    """Resolves catalogue entries by aggregator address."""

    def token_by_address(self, address: str) -> Token | None:
        ...


class AggregatorQuoteSource:
    """
    On-demand aggregator prices.

    Prices are implied rates: quote-asset units received for selling
    one whole unit of the base asset.
    """

    def __init__(
        self,
        client: JupiterClient,
        tokens: TokenLookup,
        retry_policy: RetryPolicy | None = None,
        slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    ) -> None:
        """
        Initialize the quote source.

        Args:
            client: Jupiter API client.
            tokens: Catalogue lookup (normally the token registry).
            retry_policy: Backoff policy; only ProviderError is retried.
            slippage_bps: Slippage tolerance sent with each quote.
        """
        self._client = client
        self._tokens = tokens
        self._retry = retry_policy or RetryPolicy(retry_on=(ProviderError,))
        self._slippage_bps = slippage_bps

    async def quote(self, pair: TradingPair) -> PriceQuote:
        """
        Get the current executable price for a pair.

        Never raises for provider failures; the reason is carried on the
        returned quote instead.
        """
        base_token = self._tokens.token_by_address(pair.token_address)
        quote_token = self._tokens.token_by_address(pair.quote_address)

        if base_token is None or quote_token is None:
            missing = pair.token_symbol if base_token is None else pair.quote_asset
            logger.debug(f"{pair.base_asset}: token not found ({missing})")
            return PriceQuote.failed(
                QuoteSource.AGGREGATOR,
                QuoteErrorReason.TOKEN_NOT_FOUND,
                get_timestamp_ms(),
                detail=f"{missing} not in catalogue",
            )

        amount = 10**base_token.decimals

        async def fetch() -> SwapQuote:
            return await self._client.get_quote(
                input_mint=base_token.address,
                output_mint=quote_token.address,
                amount=amount,
                slippage_bps=self._slippage_bps,
            )

        try:
            result = await self._retry.run(fetch, description=f"{pair.base_asset} quote")
        except QuoteFailure as e:
            return PriceQuote.failed(
                QuoteSource.AGGREGATOR,
                e.reason,
                get_timestamp_ms(),
                detail=str(e),
            )

        price = (result.out_amount or 0) / 10**quote_token.decimals

        return PriceQuote(
            value=price,
            source=QuoteSource.AGGREGATOR,
            observed_at_ms=get_timestamp_ms(),
        )
