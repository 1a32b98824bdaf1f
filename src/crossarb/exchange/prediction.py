"""
Client for the external prediction service.

Requests are forwarded verbatim and responses passed through; there is
no retry and no local fallback.
"""

from typing import Any

import aiohttp

from crossarb.config.constants import PREDICTION_URL
from crossarb.exchange.http import HttpClient


class PredictionClient(HttpClient):
    """Thin pass-through to the prediction model service."""

    def __init__(
        self,
        url: str = PREDICTION_URL,
        timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(timeout=timeout, session=session)
        self._url = url

    async def predict(self, symbol: str) -> Any:
        """
        Ask the service for a prediction.

        Raises:
            HttpClientError: If the service is unreachable or fails.
        """
        return await self._post_json(self._url, {"symbol": symbol})
