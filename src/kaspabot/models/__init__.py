"""Data models (Pydantic).

Re-exports all data models for convenient imports:

    from kaspabot.models import CommandSpec, ReplyPayload, MarketSnapshot
"""

from kaspabot.models.command import (
    CommandEvent,
    CommandParameter,
    CommandSpec,
    ParameterType,
)
from kaspabot.models.market import (
    AddressDetails,
    BlockDagInfo,
    BlockRewardInfo,
    BlueScoreInfo,
    ExchangeTicker,
    HalvingInfo,
    HashrateInfo,
    MarketCapInfo,
    MarketSnapshot,
    PriceInfo,
    TickerMarket,
)
from kaspabot.models.reply import ReplyField, ReplyPayload

__all__ = [
    "AddressDetails",
    "BlockDagInfo",
    "BlockRewardInfo",
    "BlueScoreInfo",
    "CommandEvent",
    "CommandParameter",
    "CommandSpec",
    "ExchangeTicker",
    "HalvingInfo",
    "HashrateInfo",
    "MarketCapInfo",
    "MarketSnapshot",
    "ParameterType",
    "PriceInfo",
    "ReplyField",
    "ReplyPayload",
    "TickerMarket",
]
