"""
Streaming quote source for the exchange ticker feed.

One long-lived websocket session subscribed to a ticker stream per
registry pair. Every ticker overwrites the price book entry for its
base asset. When the session closes, for any reason, a full
reconnect-and-resubscribe is scheduled after a constant delay, forever,
until `stop()` is called.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Any

import aiohttp
import orjson

from crossarb.config.constants import (
    BINANCE_WS_URL,
    DEFAULT_QUOTE_ASSET,
    EMPTY_PAIRS_RETRY_DELAY,
    MAX_STREAMS_PER_SUBSCRIBE,
    RECONNECT_DELAY,
    STREAM_STATS_INTERVAL,
    WS_CLOSE_TIMEOUT,
    WS_MAX_MESSAGE_SIZE,
    WS_PING_INTERVAL,
)
from crossarb.core.errors import StreamConnectionError
from crossarb.core.retry import RetryPolicy, SleepFunc
from crossarb.core.types import TradingPair
from crossarb.market.prices import PriceBook
from crossarb.market.symbols import base_from_exchange_symbol
from crossarb.utils.time import monotonic_ms


logger = logging.getLogger(__name__)


# Type aliases
PairProvider = Callable[[], Awaitable[Sequence[TradingPair]]]


class SessionState(str, Enum):
    """Lifecycle of the streaming session."""

    IDLE = "idle"
    CONNECTING = "connecting"
    SUBSCRIBED = "subscribed"
    STREAMING = "streaming"
    CLOSED = "closed"
    STOPPED = "stopped"


class TickerStream:
    """
    Supervised websocket session feeding the price book.

    The pair list is resolved through `pair_provider` at every
    (re)connect, so a reconnect also picks up registry changes; a live
    session is never resubscribed in place.
    """

    def __init__(
        self,
        price_book: PriceBook,
        pair_provider: PairProvider,
        url: str = BINANCE_WS_URL,
        quote_asset: str = DEFAULT_QUOTE_ASSET,
        reconnect_delay: float = RECONNECT_DELAY,
        empty_pairs_delay: float = EMPTY_PAIRS_RETRY_DELAY,
        stats_interval: float = STREAM_STATS_INTERVAL,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialize the stream.

        Args:
            price_book: Shared map this stream writes to.
            pair_provider: Coroutine returning the pairs to subscribe.
            url: Raw-stream websocket URL.
            quote_asset: Quote asset suffix of exchange symbols.
            reconnect_delay: Constant delay before reconnecting.
            empty_pairs_delay: Delay before re-resolving an empty pair list.
            stats_interval: Seconds between message-rate log lines.
            sleep: Awaitable sleep, replaceable in tests.
        """
        self._price_book = price_book
        self._pair_provider = pair_provider
        self._url = url
        self._quote_asset = quote_asset.upper()
        self._reconnect_policy = RetryPolicy(
            max_attempts=1,
            base_delay=reconnect_delay,
            multiplier=1.0,
            sleep=sleep,
        )
        self._empty_pairs_delay = empty_pairs_delay
        self._stats_interval_ms = int(stats_interval * 1000)
        self._sleep = sleep

        self._state = SessionState.IDLE
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._session: aiohttp.ClientSession | None = None
        self._ws: aiohttp.ClientWebSocketResponse | None = None

        self._symbol_to_base: dict[str, str] = {}
        self._request_id = 0
        self._message_count = 0
        self._interval_count = 0
        self._interval_started_ms = 0
        self._reconnect_count = 0
        self._session_count = 0

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> SessionState:
        """Get current session state."""
        return self._state

    @property
    def message_count(self) -> int:
        """Total ticker updates applied."""
        return self._message_count

    @property
    def reconnect_count(self) -> int:
        """Number of reconnects scheduled after a closed session."""
        return self._reconnect_count

    @property
    def session_count(self) -> int:
        """Number of sessions opened."""
        return self._session_count

    @property
    def subscribed_symbols(self) -> list[str]:
        return list(self._symbol_to_base)

    # =========================================================================
    # Message Handling
    # =========================================================================

    def build_streams(self, pairs: Sequence[TradingPair]) -> list[str]:
        """Ticker stream names for the pairs, and reset the symbol map."""
        self._symbol_to_base = {
            pair.exchange_symbol.upper(): pair.base_asset for pair in pairs
        }
        return [f"{pair.exchange_symbol.lower()}@ticker" for pair in pairs]

    def subscribe_messages(self, streams: list[str]) -> list[dict[str, Any]]:
        """SUBSCRIBE control messages, chunked by stream count."""
        messages = []
        for i in range(0, len(streams), MAX_STREAMS_PER_SUBSCRIBE):
            self._request_id += 1
            messages.append(
                {
                    "method": "SUBSCRIBE",
                    "params": streams[i : i + MAX_STREAMS_PER_SUBSCRIBE],
                    "id": self._request_id,
                }
            )
        return messages

    def handle_ticker(self, data: dict[str, Any]) -> bool:
        """
        Apply one ticker payload to the price book.

        Payloads without both a symbol (`s`) and a last price (`c`), such
        as subscription acknowledgements, are ignored.

        Returns:
            True if the price book was updated.
        """
        # Combined stream format: {"stream": "...", "data": {...}}
        if "data" in data and isinstance(data["data"], dict):
            data = data["data"]

        symbol = data.get("s")
        last_price = data.get("c")
        if not symbol or last_price is None:
            return False

        try:
            price = float(last_price)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring ticker with bad price for {symbol}: {last_price!r}")
            return False

        if price <= 0:
            return False

        symbol = str(symbol).upper()
        base = self._symbol_to_base.get(symbol)
        if base is None:
            base = base_from_exchange_symbol(symbol, self._quote_asset)

        self._price_book.update(base, price)
        self._message_count += 1
        self._interval_count += 1
        return True

    def _handle_message(self, msg: aiohttp.WSMessage) -> bool:
        """
        Process a websocket frame.

        Returns:
            False if the session should end.
        """
        if msg.type == aiohttp.WSMsgType.TEXT:
            try:
                data = orjson.loads(msg.data)
            except orjson.JSONDecodeError as e:
                logger.warning(f"Invalid JSON on ticker stream: {e}")
                return True

            if isinstance(data, dict) and self.handle_ticker(data):
                self._state = SessionState.STREAMING
            self._log_stats()

        elif msg.type == aiohttp.WSMsgType.ERROR:
            logger.error(f"Ticker stream error: {msg.data}")
            return False

        elif msg.type in (
            aiohttp.WSMsgType.CLOSE,
            aiohttp.WSMsgType.CLOSING,
            aiohttp.WSMsgType.CLOSED,
        ):
            return False

        return True

    def _log_stats(self) -> None:
        """Log the message rate once per stats interval."""
        now = monotonic_ms()
        if now - self._interval_started_ms < self._stats_interval_ms:
            return
        logger.info(
            f"Received {self._interval_count} price updates in the last "
            f"{self._stats_interval_ms / 1000:.0f}s"
        )
        self._interval_count = 0
        self._interval_started_ms = now

    # =========================================================================
    # Session Lifecycle
    # =========================================================================

    async def _open_session(self, pairs: Sequence[TradingPair]) -> None:
        """
        Run one websocket session until it closes.

        Raises:
            StreamConnectionError: If the connection fails or drops.
        """
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()

        streams = self.build_streams(pairs)
        self._state = SessionState.CONNECTING
        self._session_count += 1
        logger.info(f"Connecting ticker stream for {len(streams)} pairs")

        try:
            async with self._session.ws_connect(
                self._url,
                heartbeat=WS_PING_INTERVAL,
                max_msg_size=WS_MAX_MESSAGE_SIZE,
            ) as ws:
                self._ws = ws
                for message in self.subscribe_messages(streams):
                    await ws.send_str(orjson.dumps(message).decode())

                self._state = SessionState.SUBSCRIBED
                self._interval_started_ms = monotonic_ms()
                self._interval_count = 0
                logger.info(f"Subscribed to {len(streams)} ticker streams")

                async for msg in ws:
                    if not self._running or not self._handle_message(msg):
                        break

        except (aiohttp.ClientError, TimeoutError) as e:
            raise StreamConnectionError(f"Ticker stream failed: {e}") from e

        finally:
            self._ws = None
            self._state = SessionState.CLOSED

        if self._running:
            raise StreamConnectionError("Ticker stream closed by peer")

    async def run(self) -> None:
        """Supervision loop: resolve pairs, stream, reconnect."""
        self._running = True

        while self._running:
            try:
                pairs = await self._pair_provider()
            except Exception as e:
                logger.error(f"Pair resolution for ticker stream failed: {e}")
                pairs = []

            if not pairs:
                logger.info(
                    f"No matched pairs to subscribe. "
                    f"Retrying in {self._empty_pairs_delay:.0f}s"
                )
                await self._sleep(self._empty_pairs_delay)
                continue

            try:
                await self._open_session(pairs)
            except StreamConnectionError as e:
                logger.warning(str(e))
            except Exception:
                logger.exception("Ticker stream session failed")

            if not self._running:
                break

            self._reconnect_count += 1
            delay = self._reconnect_policy.delay_for(self._reconnect_count)
            logger.info(f"Ticker stream closed. Reconnecting in {delay:.1f}s")
            await self._sleep(delay)

    def start(self) -> asyncio.Task[None]:
        """Start the supervision loop as a task."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(), name="ticker-stream")
        return self._task

    async def stop(self) -> None:
        """Stop the loop, close the socket and the session."""
        self._running = False

        if self._ws is not None and not self._ws.closed:
            await self._ws.close()

        if self._task:
            self._task.cancel()
            try:
                await asyncio.wait_for(self._task, timeout=WS_CLOSE_TIMEOUT)
            except (TimeoutError, asyncio.CancelledError):
                pass
            self._task = None

        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        self._state = SessionState.STOPPED
        logger.info("Ticker stream stopped")

    async def __aenter__(self) -> "TickerStream":
        self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.stop()
