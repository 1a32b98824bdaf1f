"""
Symbol normalization.

Both venues spell the same asset differently (wrapped or liquid-staked
derivatives carry a prefix on the aggregator side). Catalogue symbols
are normalized before they are matched against exchange base assets,
which are taken as listed. This is a heuristic, not an identity check.
"""

from collections.abc import Iterable

from crossarb.config.constants import MIN_UNWRAPPED_SYMBOL_LENGTH, WRAPPER_PREFIXES


def normalize_symbol(
    symbol: str,
    prefixes: Iterable[str] = WRAPPER_PREFIXES,
    min_length: int = MIN_UNWRAPPED_SYMBOL_LENGTH,
) -> str:
    """
    Normalize an asset symbol for cross-venue matching.

    Uppercases the symbol and strips at most one leading wrapper prefix,
    provided at least `min_length` characters remain.

    Examples:
        >>> normalize_symbol("wBTC")
        'BTC'
        >>> normalize_symbol("JitoSOL")
        'SOL'
        >>> normalize_symbol("WIF")
        'WIF'
    """
    normalized = symbol.strip().upper()

    for prefix in prefixes:
        if normalized.startswith(prefix) and len(normalized) - len(prefix) >= min_length:
            return normalized[len(prefix):]

    return normalized


def is_wrapped(symbol: str) -> bool:
    """Check whether normalization would strip a prefix from `symbol`."""
    return normalize_symbol(symbol) != symbol.strip().upper()


def base_from_exchange_symbol(symbol: str, quote_asset: str) -> str:
    """
    Recover the base asset from an exchange symbol.

    Examples:
        >>> base_from_exchange_symbol("SOLUSDC", "USDC")
        'SOL'
    """
    symbol = symbol.upper()
    quote_asset = quote_asset.upper()
    if symbol.endswith(quote_asset) and len(symbol) > len(quote_asset):
        return symbol[: -len(quote_asset)]
    return symbol
