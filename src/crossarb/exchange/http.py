"""
Shared async JSON-over-HTTP client.

Features:
- Single session with connection pooling and keep-alive
- Fast JSON parsing with orjson
- Uniform error types for transport and API failures
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp
import orjson


class HttpClientError(Exception):
    """Network, timeout or decoding failure."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class HttpAPIError(HttpClientError):
    """Remote API answered with an error status."""

    def __init__(self, message: str, status: int, payload: Any = None) -> None:
        super().__init__(message, status=status)
        self.payload = payload


class HttpClient:
    """
    Base class for the venue and collaborator clients.

    Subclasses build on `_get_json` and `_post_json`.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            timeout: Total request timeout in seconds.
            session: Optional externally owned session.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=50,
                keepalive_timeout=30,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self._timeout,
                json_serialize=lambda x: orjson.dumps(x).decode(),
            )
            self._owns_session = True

        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @asynccontextmanager
    async def _request_context(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Translate aiohttp and timeout errors into HttpClientError."""
        session = await self._get_session()
        try:
            yield session
        except aiohttp.ClientError as e:
            raise HttpClientError(f"Network error: {e}") from e
        except TimeoutError as e:
            raise HttpClientError("Request timed out") from e

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a URL and decode the JSON body."""
        async with self._request_context() as session:
            async with session.get(url, params=params) as response:
                return await self._handle_response(response)

    async def _post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """POST a JSON payload and decode the JSON body."""
        async with self._request_context() as session:
            async with session.post(url, json=payload) as response:
                return await self._handle_response(response)

    async def _handle_response(self, response: aiohttp.ClientResponse) -> Any:
        """Parse and validate response."""
        text = await response.text()

        try:
            data = orjson.loads(text) if text else None
        except orjson.JSONDecodeError as e:
            if response.status >= 400:
                raise HttpAPIError(
                    f"HTTP {response.status}: {text[:200]}", status=response.status
                ) from e
            raise HttpClientError(f"Invalid JSON response: {e}", status=response.status) from e

        if response.status >= 400:
            message = text[:200]
            if isinstance(data, dict):
                message = str(data.get("error") or data.get("msg") or message)
            raise HttpAPIError(
                f"HTTP {response.status}: {message}",
                status=response.status,
                payload=data,
            )

        return data

    async def __aenter__(self) -> "HttpClient":
        await self._get_session()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
