"""Venue and collaborator HTTP clients."""

from crossarb.exchange.binance import BinanceClient
from crossarb.exchange.http import HttpAPIError, HttpClient, HttpClientError
from crossarb.exchange.jupiter import AggregatorQuoteSource, JupiterClient
from crossarb.exchange.prediction import PredictionClient
from crossarb.exchange.rate_limiter import TokenBucket


__all__ = [
    "AggregatorQuoteSource",
    "BinanceClient",
    "HttpAPIError",
    "HttpClient",
    "HttpClientError",
    "JupiterClient",
    "PredictionClient",
    "TokenBucket",
]
