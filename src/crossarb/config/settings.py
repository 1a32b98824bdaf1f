"""
Application settings with environment variable support.

Uses Pydantic Settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crossarb.config.constants import (
    BINANCE_REST_URL,
    BINANCE_WS_URL,
    DEFAULT_AGGREGATOR_FEE_RATE,
    DEFAULT_AGGREGATOR_REQUESTS_PER_SECOND,
    DEFAULT_BATCH_DELAY,
    DEFAULT_BATCH_SIZE,
    DEFAULT_EXCHANGE_FEE_RATE,
    DEFAULT_HIGH_CONFIDENCE_DIVERGENCE_PCT,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_MAX_PRICE_DIVERGENCE_PCT,
    DEFAULT_MIN_PROFIT_PCT,
    DEFAULT_NATIVE_ASSET,
    DEFAULT_QUOTE_ASSET,
    DEFAULT_QUOTE_MAX_ATTEMPTS,
    DEFAULT_QUOTE_RETRY_BASE_DELAY,
    DEFAULT_SLIPPAGE_BPS,
    EMPTY_PAIRS_RETRY_DELAY,
    JUPITER_QUOTE_URL,
    JUPITER_TOKENS_URL,
    PREDICTION_URL,
    RECONNECT_DELAY,
    RETRY_MULTIPLIER,
    STREAM_STATS_INTERVAL,
    USDC_MINT_ADDRESS,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Venue Endpoints
    # =========================================================================

    exchange_rest_url: str = Field(
        default=BINANCE_REST_URL,
        description="Binance REST base URL (exchange info)",
    )
    exchange_ws_url: str = Field(
        default=BINANCE_WS_URL,
        description="Binance raw-stream websocket URL",
    )
    aggregator_quote_url: str = Field(
        default=JUPITER_QUOTE_URL,
        description="Jupiter swap quote endpoint",
    )
    aggregator_tokens_url: str = Field(
        default=JUPITER_TOKENS_URL,
        description="Jupiter token catalogue endpoint",
    )
    prediction_url: str = Field(
        default=PREDICTION_URL,
        description="External prediction service endpoint",
    )

    exchange_name: str = Field(default="Binance", min_length=1)
    aggregator_name: str = Field(default="Jupiter", min_length=1)

    # =========================================================================
    # Quote Asset
    # =========================================================================

    quote_asset: str = Field(
        default=DEFAULT_QUOTE_ASSET,
        description="Stablecoin both venues are priced against",
    )
    quote_asset_address: str = Field(
        default=USDC_MINT_ADDRESS,
        description="Aggregator-side identifier (mint) of the quote asset",
    )

    # =========================================================================
    # Fee Models
    # =========================================================================

    aggregator_fee_rate: float = Field(
        default=DEFAULT_AGGREGATOR_FEE_RATE,
        ge=0.0,
        le=0.05,
        description="Aggregator swap fee (e.g., 0.003 = 0.3%)",
    )
    exchange_fee_rate: float = Field(
        default=DEFAULT_EXCHANGE_FEE_RATE,
        ge=0.0,
        le=0.05,
        description="Exchange taker fee (e.g., 0.001 = 0.1%)",
    )
    network_fee_native: float = Field(
        default=0.0,
        ge=0.0,
        description="Fixed per-swap network cost, in units of the native asset",
    )
    native_asset: str = Field(
        default=DEFAULT_NATIVE_ASSET,
        description="Native asset whose streamed price converts the network cost",
    )

    # =========================================================================
    # Detection
    # =========================================================================

    min_profit_pct: float = Field(
        default=DEFAULT_MIN_PROFIT_PCT,
        ge=0.0,
        le=100.0,
        description="Minimum net profit percentage to report an opportunity",
    )
    max_price_divergence_pct: float = Field(
        default=DEFAULT_MAX_PRICE_DIVERGENCE_PCT,
        gt=0.0,
        description="Raw divergence above which a pair is treated as a bad quote",
    )
    high_confidence_divergence_pct: float = Field(
        default=DEFAULT_HIGH_CONFIDENCE_DIVERGENCE_PCT,
        gt=0.0,
        description="Raw divergence below which an opportunity is 'high' confidence",
    )
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1, le=50)
    batch_delay: float = Field(
        default=DEFAULT_BATCH_DELAY,
        ge=0.0,
        description="Pause between batches in seconds",
    )
    slippage_bps: int = Field(default=DEFAULT_SLIPPAGE_BPS, ge=0, le=10_000)

    # =========================================================================
    # Retry & Streaming
    # =========================================================================

    quote_max_attempts: int = Field(default=DEFAULT_QUOTE_MAX_ATTEMPTS, ge=1, le=10)
    quote_retry_base_delay: float = Field(default=DEFAULT_QUOTE_RETRY_BASE_DELAY, ge=0.0)
    quote_retry_multiplier: float = Field(default=RETRY_MULTIPLIER, ge=1.0)

    reconnect_delay: float = Field(default=RECONNECT_DELAY, gt=0.0)
    empty_pairs_retry_delay: float = Field(default=EMPTY_PAIRS_RETRY_DELAY, gt=0.0)
    stream_stats_interval: float = Field(default=STREAM_STATS_INTERVAL, gt=0.0)

    registry_max_age: float = Field(
        default=300.0,
        ge=0.0,
        description="Seconds before the pair registry is refreshed ahead of a pass",
    )

    # =========================================================================
    # Transport
    # =========================================================================

    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0.0)
    aggregator_requests_per_second: float = Field(
        default=DEFAULT_AGGREGATOR_REQUESTS_PER_SECOND,
        gt=0.0,
    )

    # =========================================================================
    # Service
    # =========================================================================

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: Path | None = Field(default=None)

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("quote_asset", "native_asset", mode="after")
    @classmethod
    def uppercase_asset(cls, v: str) -> str:
        """Asset symbols are compared upper-case."""
        return v.strip().upper()

    @model_validator(mode="after")
    def check_divergence_thresholds(self) -> "Settings":
        """The confidence threshold must sit inside the sanity ceiling."""
        if self.high_confidence_divergence_pct > self.max_price_divergence_pct:
            raise ValueError(
                "high_confidence_divergence_pct cannot exceed max_price_divergence_pct"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Clear cache with `get_settings.cache_clear()` if needed.
    """
    return Settings()
