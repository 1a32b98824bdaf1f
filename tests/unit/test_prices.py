"""
Unit tests for PriceBook.
"""

from crossarb.core.types import QuoteSource
from crossarb.market.prices import PriceBook


class TestPriceBook:
    """Tests for PriceBook."""

    def test_empty(self, price_book: PriceBook) -> None:
        assert price_book.get("SOL") is None
        assert price_book.price("SOL") is None
        assert price_book.size == 0

    def test_update_and_get(self, price_book: PriceBook) -> None:
        price_book.update("SOL", 100.0, observed_at_ms=1000)

        quote = price_book.get("SOL")
        assert quote is not None
        assert quote.value == 100.0
        assert quote.source == QuoteSource.STREAM
        assert quote.observed_at_ms == 1000
        assert quote.ok

    def test_last_write_wins(self, price_book: PriceBook) -> None:
        price_book.update("SOL", 100.0)
        price_book.update("SOL", 101.5)

        assert price_book.price("SOL") == 101.5
        assert price_book.size == 1
