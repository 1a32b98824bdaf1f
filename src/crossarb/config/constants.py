"""
Venue endpoints and detection constants.

This module contains all hardcoded values used throughout the engine.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Binance (streaming venue)
# =============================================================================

BINANCE_REST_URL: Final[str] = "https://api.binance.com"
BINANCE_WS_URL: Final[str] = "wss://stream.binance.com:9443/ws"

ENDPOINT_EXCHANGE_INFO: Final[str] = "/api/v3/exchangeInfo"

SYMBOL_STATUS_TRADING: Final[str] = "TRADING"


# =============================================================================
# Jupiter (aggregator venue)
# =============================================================================

JUPITER_QUOTE_URL: Final[str] = "https://lite-api.jup.ag/swap/v1/quote"
JUPITER_TOKENS_URL: Final[str] = "https://lite-api.jup.ag/tokens/v1/tagged/verified"

# Error codes Jupiter uses when no swap path exists
NO_ROUTE_ERROR_CODES: Final[frozenset[str]] = frozenset(
    {
        "COULD_NOT_FIND_ANY_ROUTE",
        "NO_ROUTES_FOUND",
        "ROUTE_NOT_FOUND",
        "TOKEN_NOT_TRADABLE",
    }
)

DEFAULT_SLIPPAGE_BPS: Final[int] = 50


# =============================================================================
# Quote Asset
# =============================================================================

DEFAULT_QUOTE_ASSET: Final[str] = "USDC"
USDC_MINT_ADDRESS: Final[str] = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
DEFAULT_NATIVE_ASSET: Final[str] = "SOL"


# =============================================================================
# Fees
# =============================================================================

DEFAULT_AGGREGATOR_FEE_RATE: Final[float] = 0.003  # 0.3% swap fee
DEFAULT_EXCHANGE_FEE_RATE: Final[float] = 0.001  # 0.1% taker fee


# =============================================================================
# Detection
# =============================================================================

DEFAULT_MIN_PROFIT_PCT: Final[float] = 0.5
DEFAULT_MAX_PRICE_DIVERGENCE_PCT: Final[float] = 30.0
DEFAULT_HIGH_CONFIDENCE_DIVERGENCE_PCT: Final[float] = 10.0

DEFAULT_BATCH_SIZE: Final[int] = 3
DEFAULT_BATCH_DELAY: Final[float] = 2.0  # seconds


# =============================================================================
# Retry & Reconnection
# =============================================================================

DEFAULT_QUOTE_MAX_ATTEMPTS: Final[int] = 3
DEFAULT_QUOTE_RETRY_BASE_DELAY: Final[float] = 1.0  # seconds
RETRY_MULTIPLIER: Final[float] = 2.0

RECONNECT_DELAY: Final[float] = 5.0  # seconds, constant
EMPTY_PAIRS_RETRY_DELAY: Final[float] = 30.0  # seconds


# =============================================================================
# WebSocket Configuration
# =============================================================================

WS_PING_INTERVAL: Final[float] = 20.0  # seconds
WS_MAX_MESSAGE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
WS_CLOSE_TIMEOUT: Final[float] = 5.0  # seconds

# Stream names per SUBSCRIBE control message
MAX_STREAMS_PER_SUBSCRIBE: Final[int] = 200

STREAM_STATS_INTERVAL: Final[float] = 60.0  # seconds


# =============================================================================
# HTTP
# =============================================================================

DEFAULT_HTTP_TIMEOUT: Final[float] = 10.0  # seconds
DEFAULT_AGGREGATOR_REQUESTS_PER_SECOND: Final[float] = 5.0

PREDICTION_URL: Final[str] = "http://127.0.0.1:5000/predict"


# =============================================================================
# Precision & Formatting
# =============================================================================

PRICE_PRECISION: Final[int] = 8
PROFIT_PRECISION: Final[int] = 4
PERCENTAGE_PRECISION: Final[int] = 4


# =============================================================================
# Symbol Normalization
# =============================================================================

# Leading markers for wrapped or liquid-staked derivatives, longest first
WRAPPER_PREFIXES: Final[tuple[str, ...]] = ("WRAPPED", "JITO", "ST", "W")

# Shortest remainder that may be left after stripping a prefix
MIN_UNWRAPPED_SYMBOL_LENGTH: Final[int] = 3


# =============================================================================
# Logging & Telemetry
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

MAX_LOG_QUEUE_SIZE: Final[int] = 10_000
