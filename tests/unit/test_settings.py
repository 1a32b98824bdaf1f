"""
Unit tests for Settings.
"""

import pytest
from pydantic import ValidationError

from crossarb.config.settings import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.quote_asset == "USDC"
        assert settings.aggregator_fee_rate == 0.003
        assert settings.exchange_fee_rate == 0.001
        assert settings.min_profit_pct == 0.5
        assert settings.max_price_divergence_pct == 30.0
        assert settings.batch_size == 3
        assert settings.batch_delay == 2.0
        assert settings.slippage_bps == 50
        assert settings.reconnect_delay == 5.0

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_PROFIT_PCT", "1.25")
        monkeypatch.setenv("BATCH_SIZE", "5")
        monkeypatch.setenv("QUOTE_ASSET", " usdc ")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.min_profit_pct == 1.25
        assert settings.batch_size == 5
        assert settings.quote_asset == "USDC"

    def test_confidence_threshold_inside_ceiling(self) -> None:
        with pytest.raises(ValidationError):
            Settings(  # type: ignore[call-arg]
                _env_file=None,
                max_price_divergence_pct=5.0,
                high_confidence_divergence_pct=10.0,
            )

    def test_rejects_zero_batch_size(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, batch_size=0)  # type: ignore[call-arg]
