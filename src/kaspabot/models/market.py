"""Normalized Kaspa network and market data models.

All float fields reject NaN and infinity so a malformed upstream payload fails
validation instead of reaching a reply.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DIGITS = r"^\d+$"


class _UpstreamModel(BaseModel):
    """Base for models parsed straight from upstream JSON."""

    model_config = ConfigDict(
        allow_inf_nan=False,
        populate_by_name=True,
        frozen=True,
    )


class AddressDetails(_UpstreamModel):
    """Balance summary of a Kaspa address.

    Attributes:
        address: The queried address, as given by the user.
        balance: Balance in KAS (sompi / 1e8).
        utxo_count: Number of unspent outputs.
        transaction_count: Total number of transactions.
    """

    address: str
    balance: float
    utxo_count: int = Field(ge=0)
    transaction_count: int = Field(ge=0)


class PriceInfo(_UpstreamModel):
    """Current KAS price in USD."""

    price: float = Field(ge=0)


class MarketCapInfo(_UpstreamModel):
    """Current KAS market capitalization in USD."""

    marketcap: float = Field(ge=0)


class HashrateInfo(_UpstreamModel):
    """Network hashrate in TH/s."""

    hashrate: float = Field(ge=0)


class BlockRewardInfo(_UpstreamModel):
    """Current block reward in KAS."""

    blockreward: float = Field(gt=0)


class BlueScoreInfo(_UpstreamModel):
    """Virtual chain blue score."""

    blue_score: int = Field(alias="blueScore", gt=0)


class BlockDagInfo(_UpstreamModel):
    """BlockDAG summary.

    Block and header counts are kept as decimal strings so they can be
    displayed without any precision loss.
    """

    network_name: str = Field(alias="networkName", min_length=1)
    block_count: str = Field(alias="blockCount", pattern=_DIGITS)
    header_count: str = Field(alias="headerCount", pattern=_DIGITS)

    @field_validator("block_count", "header_count", mode="before")
    @classmethod
    def _int_to_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class HalvingInfo(_UpstreamModel):
    """Next reward reduction."""

    next_halving_timestamp: int = Field(alias="nextHalvingTimestamp", ge=0)
    next_halving_amount: float = Field(alias="nextHalvingAmount", ge=0)


class MarketSnapshot(_UpstreamModel):
    """CoinGecko market data for one asset (USD)."""

    current_price: float
    market_cap: float
    total_volume: float
    price_change_percentage_24h: float
    high_24h: float
    low_24h: float


class TickerMarket(_UpstreamModel):
    """Exchange a ticker is listed on."""

    name: str


class ExchangeTicker(_UpstreamModel):
    """One trading pair listing from the CoinGecko tickers endpoint."""

    market: TickerMarket
    base: str
    target: str
    last: float
    volume: float
    trade_url: str | None = None
    coin_id: str | None = None
    target_coin_id: str | None = None
