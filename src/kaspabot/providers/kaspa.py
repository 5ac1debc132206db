"""Kaspa REST API provider (api.kaspa.org)."""

from __future__ import annotations

import math
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from kaspabot.core.fanout import gather_all
from kaspabot.errors import UpstreamError
from kaspabot.models import (
    AddressDetails,
    BlockDagInfo,
    BlockRewardInfo,
    BlueScoreInfo,
    HalvingInfo,
    HashrateInfo,
    MarketCapInfo,
    PriceInfo,
)
from kaspabot.providers.base import BaseProvider

SOMPI_PER_KAS = 100_000_000


class _BalanceResponse(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    balance: float


class _TransactionsCountResponse(BaseModel):
    total: int = Field(ge=0)


class KaspaApiProvider(BaseProvider):
    """Network and address data from the Kaspa REST API."""

    async def get_address_details(self, address: str) -> AddressDetails:
        """Balance, UTXO count and transaction count of an address.

        The three sub-requests run concurrently; if any of them fails the
        whole lookup fails. The address is passed through as-is (URL-encoded)
        and the API is left to reject malformed ones.

        Args:
            address: Kaspa address, e.g. ``kaspa:qq...``.

        Raises:
            UpstreamError: If a sub-request fails or the balance is not finite.
        """
        encoded = quote(address, safe="")
        balance, utxos, tx_count = await gather_all(
            self.fetch(_BalanceResponse, f"addresses/{encoded}/balance"),
            self._http.get_json(f"addresses/{encoded}/utxos"),
            self.fetch(_TransactionsCountResponse, f"addresses/{encoded}/transactions-count"),
        )

        if not isinstance(utxos, list):
            raise UpstreamError(
                "UTXO response is not a list",
                endpoint=self._http.url_for(f"addresses/{encoded}/utxos"),
                body=str(utxos)[:300],
            )

        balance_kas = balance.balance / SOMPI_PER_KAS
        if not math.isfinite(balance_kas):
            raise UpstreamError(
                "invalid balance value",
                endpoint=self._http.url_for(f"addresses/{encoded}/balance"),
            )

        return AddressDetails(
            address=address,
            balance=balance_kas,
            utxo_count=len(utxos),
            transaction_count=tx_count.total,
        )

    async def get_price(self) -> PriceInfo:
        """Current KAS price in USD."""
        return await self.fetch(PriceInfo, "info/price")

    async def get_market_cap(self) -> MarketCapInfo:
        """Current KAS market capitalization in USD."""
        return await self.fetch(MarketCapInfo, "info/marketcap")

    async def get_hashrate(self) -> float:
        """Network hashrate in TH/s."""
        info = await self.fetch(HashrateInfo, "info/hashrate")
        return info.hashrate

    async def get_block_reward(self) -> BlockRewardInfo:
        """Current block reward."""
        return await self.fetch(BlockRewardInfo, "info/blockreward")

    async def get_blue_score(self) -> BlueScoreInfo:
        """Virtual chain blue score."""
        return await self.fetch(BlueScoreInfo, "info/virtual-chain-blue-score")

    async def get_blockdag(self) -> BlockDagInfo:
        """Network name and block/header counts."""
        return await self.fetch(BlockDagInfo, "info/blockdag")

    async def get_halving(self) -> HalvingInfo:
        """Next reward reduction amount and time."""
        return await self.fetch(HalvingInfo, "info/halving")
