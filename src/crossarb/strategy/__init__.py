"""Strategy module for cross-venue arbitrage detection."""

from crossarb.strategy.calculator import ArbitrageCalculator, VenueFees, price_divergence_pct
from crossarb.strategy.opportunity import OpportunityDetector, PairOutcome


__all__ = [
    "ArbitrageCalculator",
    "OpportunityDetector",
    "PairOutcome",
    "VenueFees",
    "price_divergence_pct",
]
