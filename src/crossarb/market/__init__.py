"""Market data: pair registry, streamed prices and symbol handling."""

from crossarb.market.prices import PriceBook
from crossarb.market.registry import TokenRegistry
from crossarb.market.symbols import normalize_symbol
from crossarb.market.websocket import SessionState, TickerStream


__all__ = [
    "PriceBook",
    "SessionState",
    "TickerStream",
    "TokenRegistry",
    "normalize_symbol",
]
