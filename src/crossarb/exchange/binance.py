"""
Async Binance REST client.

Only the public exchange-info endpoint is needed: it lists the spot
symbols quoted against the stablecoin that the ticker stream
subscribes to.
"""

import logging

import aiohttp
from pydantic import ValidationError

from crossarb.config.constants import (
    BINANCE_REST_URL,
    ENDPOINT_EXCHANGE_INFO,
    SYMBOL_STATUS_TRADING,
)
from crossarb.exchange.http import HttpClient, HttpClientError
from crossarb.exchange.models import ExchangeInfo, SymbolData


logger = logging.getLogger(__name__)


class BinanceClient(HttpClient):
    """Public Binance REST endpoints."""

    def __init__(
        self,
        base_url: str = BINANCE_REST_URL,
        timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(timeout=timeout, session=session)
        self._base_url = base_url.rstrip("/")

    async def get_exchange_info(self) -> ExchangeInfo:
        """
        Get exchange trading rules and symbol information.

        Note: This is a heavy request, cache the result.

        Raises:
            HttpClientError: On transport, API or schema errors.
        """
        data = await self._get_json(f"{self._base_url}{ENDPOINT_EXCHANGE_INFO}")
        try:
            return ExchangeInfo.model_validate(data)
        except ValidationError as e:
            raise HttpClientError(f"Unexpected exchange info payload: {e}") from e

    async def get_quoted_symbols(self, quote_asset: str) -> list[SymbolData]:
        """
        Get trading symbols quoted in `quote_asset`.

        Args:
            quote_asset: Quote asset (e.g., "USDC").

        Returns:
            Symbols currently in TRADING status.
        """
        info = await self.get_exchange_info()
        quote_asset = quote_asset.upper()

        symbols = [
            s
            for s in info.symbols
            if s.quote_asset.upper() == quote_asset and s.status == SYMBOL_STATUS_TRADING
        ]
        logger.debug(f"{len(symbols)} of {len(info.symbols)} symbols trade against {quote_asset}")
        return symbols
