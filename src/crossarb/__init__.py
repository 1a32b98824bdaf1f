"""
Cross-Venue Arbitrage Detection Engine.

Streams centralized-exchange prices, polls a DEX aggregator on demand and
reports fee-adjusted arbitrage opportunities between the two venues.
"""

__version__ = "1.0.0"
