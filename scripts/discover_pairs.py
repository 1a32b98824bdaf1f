#!/usr/bin/env python3
"""
Pair Discovery Script.

Loads the aggregator catalogue and the exchange symbol list, and
displays the pairs the registry matches, without streaming or quoting.
"""

import asyncio
import sys
from pathlib import Path

import orjson

# Add src to path for direct execution
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from crossarb.config.settings import get_settings
from crossarb.exchange.binance import BinanceClient
from crossarb.exchange.jupiter import JupiterClient
from crossarb.market.registry import TokenRegistry
from crossarb.market.symbols import is_wrapped


async def main() -> int:
    """Discover and display matched pairs."""
    print("=" * 60)
    print("  PAIR DISCOVERY")
    print("=" * 60)
    print()

    try:
        settings = get_settings()
    except Exception as e:
        print(f"Error loading settings: {e}")
        return 1

    async with (
        JupiterClient(
            quote_url=settings.aggregator_quote_url,
            tokens_url=settings.aggregator_tokens_url,
            timeout=settings.http_timeout,
        ) as jupiter,
        BinanceClient(base_url=settings.exchange_rest_url, timeout=settings.http_timeout) as binance,
    ):
        registry = TokenRegistry(
            aggregator=jupiter,
            exchange=binance,
            quote_asset=settings.quote_asset,
            quote_asset_address=settings.quote_asset_address,
        )

        print(f"Matching {settings.aggregator_name} tokens with {settings.exchange_name} {settings.quote_asset} pairs...")
        pairs = await registry.refresh()
        print(f"Found {len(pairs)} matched pairs")
        print()

        if not pairs:
            return 1

        print("=" * 60)
        print("  MATCHED PAIRS")
        print("=" * 60)
        print()

        for i, pair in enumerate(sorted(pairs, key=lambda p: p.base_asset), 1):
            print(f"{i:3}. {pair.base_asset:<10} {pair.exchange_symbol:<14} {pair.token_symbol:<10} {pair.token_address}")

        print()
        print("=" * 60)
        print("  SUMMARY")
        print("=" * 60)
        print()

        wrapped = sum(1 for p in pairs if is_wrapped(p.token_symbol))
        print(f"Total pairs:     {len(pairs)}")
        print(f"Via wrapper:     {wrapped}")
        print(f"Quote asset:     {settings.quote_asset}")
        print()

        export_path = Path("pairs.json")
        export_path.write_bytes(
            orjson.dumps([p.to_dict() for p in pairs], option=orjson.OPT_INDENT_2)
        )
        print(f"Exported to: {export_path}")

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
