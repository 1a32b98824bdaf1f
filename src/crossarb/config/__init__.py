"""Configuration module for the arbitrage engine."""

from crossarb.config.constants import (
    BINANCE_REST_URL,
    BINANCE_WS_URL,
    DEFAULT_AGGREGATOR_FEE_RATE,
    DEFAULT_EXCHANGE_FEE_RATE,
    JUPITER_QUOTE_URL,
)
from crossarb.config.settings import Settings, get_settings


__all__ = [
    "Settings",
    "get_settings",
    "BINANCE_REST_URL",
    "BINANCE_WS_URL",
    "JUPITER_QUOTE_URL",
    "DEFAULT_AGGREGATOR_FEE_RATE",
    "DEFAULT_EXCHANGE_FEE_RATE",
]
