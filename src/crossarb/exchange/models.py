"""
Pydantic models for venue API responses.

These models provide type-safe parsing of exchange and aggregator
responses with automatic validation.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# =============================================================================
# Binance
# =============================================================================


class SymbolData(BaseModel):
    """Symbol information from exchange info."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    symbol: str
    status: str
    base_asset: str = Field(alias="baseAsset")
    quote_asset: str = Field(alias="quoteAsset")


class ExchangeInfo(BaseModel):
    """Exchange information response (only the symbol list is used)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    symbols: list[SymbolData]


# =============================================================================
# Jupiter
# =============================================================================


class CatalogueToken(BaseModel):
    """
    Aggregator token catalogue entry.

    The mint is published as `address` by the token list APIs and as
    `id` or `mint` by some of their revisions.
    """

    model_config = ConfigDict(extra="ignore")

    address: str = Field(validation_alias=AliasChoices("address", "mint", "id"))
    symbol: str
    decimals: int = Field(ge=0, le=30)
    name: str = ""


class SwapQuote(BaseModel):
    """Subset of a swap quote response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    input_mint: str = Field(default="", alias="inputMint")
    output_mint: str = Field(default="", alias="outputMint")
    in_amount: int = Field(default=0, alias="inAmount")
    out_amount: int | None = Field(default=None, alias="outAmount")
    price_impact_pct: float | None = Field(default=None, alias="priceImpactPct")
