"""
Unit tests for TokenRegistry.

Tests the catalogue/exchange join, wrapper-prefix precedence and the
degrade-to-empty behaviour on load failures.
"""

import pytest

from crossarb.config.constants import USDC_MINT_ADDRESS
from crossarb.core.errors import CatalogUnavailable
from crossarb.core.retry import RetryPolicy
from crossarb.exchange.http import HttpClientError
from crossarb.market.registry import TokenRegistry
from tests.mocks import MockCatalogueClient, MockExchangeClient, RecordingSleep


USDC = {"address": USDC_MINT_ADDRESS, "symbol": "USDC", "decimals": 6, "name": "USD Coin"}
SOL = {"address": "sol-mint", "symbol": "SOL", "decimals": 9}
WBTC = {"address": "wbtc-mint", "symbol": "wBTC", "decimals": 8}
BTC = {"address": "btc-mint", "symbol": "BTC", "decimals": 8}
BONK = {"address": "bonk-mint", "symbol": "Bonk", "decimals": 5}
WAVES = {"address": "waves-mint", "symbol": "WAVES", "decimals": 8}
STORJ = {"address": "storj-mint", "symbol": "STORJ", "decimals": 8}
WIF = {"address": "wif-mint", "symbol": "WIF", "decimals": 6}
ORJ = {"address": "orj-mint", "symbol": "ORJ", "decimals": 6}


def make_registry(
    catalogue: MockCatalogueClient,
    exchange: MockExchangeClient,
    sleep: RecordingSleep | None = None,
) -> TokenRegistry:
    return TokenRegistry(
        aggregator=catalogue,  # type: ignore[arg-type]
        exchange=exchange,  # type: ignore[arg-type]
        quote_asset="USDC",
        quote_asset_address=USDC_MINT_ADDRESS,
        retry_policy=RetryPolicy(
            retry_on=(HttpClientError,),
            sleep=sleep or RecordingSleep(),
        ),
    )


class TestTokenRegistry:
    """Tests for TokenRegistry."""

    @pytest.mark.asyncio
    async def test_refresh_joins_on_normalized_symbol(self) -> None:
        registry = make_registry(
            MockCatalogueClient([USDC, SOL, WBTC, BONK]),
            MockExchangeClient(["SOL", "BTC", "ETH"]),
        )

        pairs = await registry.refresh()

        by_base = {p.base_asset: p for p in pairs}
        assert set(by_base) == {"SOL", "BTC"}

        btc = by_base["BTC"]
        assert btc.exchange_symbol == "BTCUSDC"
        assert btc.token_symbol == "wBTC"
        assert btc.token_address == "wbtc-mint"
        assert btc.quote_address == USDC_MINT_ADDRESS
        assert btc.quote_asset == "USDC"

        assert len(registry) == 2
        assert registry.age_seconds() is not None

    @pytest.mark.asyncio
    async def test_exchange_base_assets_kept_as_listed(self) -> None:
        registry = make_registry(
            MockCatalogueClient([USDC, WAVES, STORJ, WIF]),
            MockExchangeClient(["WAVES", "STORJ", "WIF"]),
        )

        pairs = await registry.refresh()

        assert [p.base_asset for p in pairs] == ["WAVES", "STORJ", "WIF"]
        assert [p.token_address for p in pairs] == ["waves-mint", "storj-mint", "wif-mint"]

    @pytest.mark.asyncio
    async def test_no_join_on_stripped_exchange_ticker(self) -> None:
        registry = make_registry(
            MockCatalogueClient([USDC, ORJ]),
            MockExchangeClient(["STORJ"]),
        )

        assert await registry.refresh() == []

    @pytest.mark.asyncio
    async def test_lookup_by_address(self) -> None:
        registry = make_registry(
            MockCatalogueClient([USDC, SOL]),
            MockExchangeClient(["SOL"]),
        )
        await registry.refresh()

        token = registry.token_by_address("sol-mint")
        assert token is not None
        assert token.decimals == 9
        assert registry.token_by_address("missing") is None

    @pytest.mark.parametrize("entries", [[USDC, WBTC, BTC], [USDC, BTC, WBTC]])
    @pytest.mark.asyncio
    async def test_canonical_symbol_wins_collision(self, entries: list[dict]) -> None:
        registry = make_registry(MockCatalogueClient(entries), MockExchangeClient(["BTC"]))

        pairs = await registry.refresh()

        assert len(pairs) == 1
        assert pairs[0].token_address == "btc-mint"
        assert pairs[0].token_symbol == "BTC"

    @pytest.mark.asyncio
    async def test_quote_token_never_paired(self) -> None:
        registry = make_registry(
            MockCatalogueClient([USDC, SOL]),
            MockExchangeClient(["USDC", "SOL"]),
        )

        pairs = await registry.refresh()

        assert [p.base_asset for p in pairs] == ["SOL"]

    @pytest.mark.asyncio
    async def test_quote_token_found_by_symbol(self) -> None:
        moved = {**USDC, "address": "other-usdc-mint"}
        registry = make_registry(MockCatalogueClient([moved, SOL]), MockExchangeClient(["SOL"]))

        pairs = await registry.refresh()

        assert pairs[0].quote_address == "other-usdc-mint"

    @pytest.mark.asyncio
    async def test_catalogue_failure_yields_empty(self) -> None:
        sleep = RecordingSleep()
        catalogue = MockCatalogueClient(error=HttpClientError("down"))
        exchange = MockExchangeClient(["SOL"])
        registry = make_registry(catalogue, exchange, sleep)

        assert await registry.refresh() == []
        assert catalogue.calls == 3
        assert sleep.delays == [1.0, 2.0]
        assert exchange.calls == 0
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_exchange_failure_replaces_previous_pairs(self) -> None:
        exchange = MockExchangeClient(["SOL"])
        registry = make_registry(MockCatalogueClient([USDC, SOL]), exchange)
        assert len(await registry.refresh()) == 1

        exchange.error = HttpClientError("HTTP 503")

        assert await registry.refresh() == []
        assert registry.pairs == []
        assert registry.token_by_address("sol-mint") is None

    @pytest.mark.asyncio
    async def test_missing_quote_asset(self) -> None:
        registry = make_registry(MockCatalogueClient([SOL]), MockExchangeClient(["SOL"]))

        with pytest.raises(CatalogUnavailable):
            await registry.load_catalogue()

        assert await registry.refresh() == []

    def test_age_before_first_refresh(self) -> None:
        registry = make_registry(MockCatalogueClient(), MockExchangeClient())

        assert registry.age_seconds() is None
        assert registry.pairs == []
