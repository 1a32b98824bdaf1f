"""
Latest streamed price per base asset.

Single-writer store: the ticker stream is the only writer, the detector
and status routes only read. All access happens on one event loop.
"""

from crossarb.core.types import PriceQuote, QuoteSource
from crossarb.utils.time import get_timestamp_ms


class PriceBook:
    """
    Last-write-wins map of base asset -> streamed quote.

    Entries are never cleared on disconnect; consumers judge staleness
    from `observed_at_ms`.
    """

    __slots__ = ("_prices",)

    def __init__(self) -> None:
        """Initialize empty price book."""
        self._prices: dict[str, PriceQuote] = {}

    def update(self, asset: str, price: float, observed_at_ms: int | None = None) -> PriceQuote:
        """
        Store the latest price for an asset.

        Args:
            asset: Base asset symbol.
            price: Last trade price in quote-asset units.
            observed_at_ms: Observation time (default: now).

        Returns:
            The stored quote.
        """
        quote = PriceQuote(
            value=price,
            source=QuoteSource.STREAM,
            observed_at_ms=observed_at_ms if observed_at_ms is not None else get_timestamp_ms(),
        )
        self._prices[asset] = quote
        return quote

    def get(self, asset: str) -> PriceQuote | None:
        """Latest quote for an asset, or None if nothing was received yet."""
        return self._prices.get(asset)

    def price(self, asset: str) -> float | None:
        """Latest price value for an asset."""
        quote = self._prices.get(asset)
        return quote.value if quote else None

    @property
    def size(self) -> int:
        """Number of assets with a price."""
        return len(self._prices)
