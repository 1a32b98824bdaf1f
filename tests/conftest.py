"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

import pytest

from crossarb.config.constants import USDC_MINT_ADDRESS
from crossarb.core.types import Token, TradingPair
from crossarb.market.prices import PriceBook
from crossarb.strategy.calculator import ArbitrageCalculator, VenueFees
from crossarb.telemetry.status import PairStatusTracker
from tests.mocks import RecordingSleep, make_pair


# =============================================================================
# Token and Pair Fixtures
# =============================================================================


@pytest.fixture
def usdc_token() -> Token:
    """USDC catalogue entry."""
    return Token(symbol="USDC", address=USDC_MINT_ADDRESS, decimals=6, name="USD Coin")


@pytest.fixture
def sol_token() -> Token:
    """SOL catalogue entry."""
    return Token(symbol="SOL", address="sol-mint", decimals=9, name="Wrapped SOL")


@pytest.fixture
def sol_pair() -> TradingPair:
    """SOL/USDC pair."""
    return make_pair("SOL")


@pytest.fixture
def bonk_pair() -> TradingPair:
    """BONK/USDC pair."""
    return make_pair("BONK")


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def price_book() -> PriceBook:
    """Empty price book."""
    return PriceBook()


@pytest.fixture
def status_tracker() -> PairStatusTracker:
    """Empty status tracker."""
    return PairStatusTracker()


@pytest.fixture
def calculator() -> ArbitrageCalculator:
    """Calculator with the default venue fees and thresholds."""
    return ArbitrageCalculator(
        aggregator_fees=VenueFees("Jupiter", 0.003),
        exchange_fees=VenueFees("Binance", 0.001),
        min_profit_pct=0.5,
        max_divergence_pct=30.0,
        high_confidence_pct=10.0,
    )


@pytest.fixture
def low_threshold_calculator() -> ArbitrageCalculator:
    """Calculator accepting any profit above 0.05%."""
    return ArbitrageCalculator(
        aggregator_fees=VenueFees("Jupiter", 0.003),
        exchange_fees=VenueFees("Binance", 0.001),
        min_profit_pct=0.05,
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep replacement that records delays."""
    return RecordingSleep()
