"""CoinGecko public API provider."""

from __future__ import annotations

from typing import Any

from kaspabot.errors import UpstreamError
from kaspabot.models import ExchangeTicker, MarketSnapshot
from kaspabot.providers.base import BaseProvider, parse_model
from kaspabot.providers.http import JsonHttpClient

DEFAULT_EXCHANGE_LIMIT = 9


class CoinGeckoProvider(BaseProvider):
    """Market data and exchange listings for one coin.

    Args:
        http: Client for the CoinGecko API root.
        coin_id: CoinGecko asset id.
        target_coin_id: Quote asset id exchange listings are filtered to.
    """

    def __init__(
        self,
        http: JsonHttpClient,
        coin_id: str = "kaspa",
        target_coin_id: str = "tether",
    ) -> None:
        super().__init__(http)
        self.coin_id = coin_id
        self.target_coin_id = target_coin_id

    async def get_market_data(self, vs_currency: str = "usd") -> MarketSnapshot | None:
        """Current price, market cap, volume and 24h range.

        Returns:
            The snapshot, or None if CoinGecko returned no entry for the coin.
        """
        path = "coins/markets"
        data = await self._http.get_json(
            path, params={"ids": self.coin_id, "vs_currency": vs_currency}
        )
        if not isinstance(data, list):
            raise UpstreamError(
                "markets response is not a list",
                endpoint=self._http.url_for(path),
                body=str(data)[:300],
            )
        if not data:
            return None
        return parse_model(MarketSnapshot, data[0], self._http.url_for(path))

    async def get_top_exchanges(self, limit: int = DEFAULT_EXCHANGE_LIMIT) -> list[ExchangeTicker]:
        """Highest-trust exchanges listing the coin against the target asset.

        Tickers come back sorted by trust score; only pairs of ``coin_id``
        against ``target_coin_id`` are kept, in that order.

        Args:
            limit: Maximum number of tickers to return.
        """
        path = f"coins/{self.coin_id}/tickers"
        data = await self._http.get_json(path, params={"order": "trust_score_desc"})
        tickers: Any = data.get("tickers") if isinstance(data, dict) else None
        if not isinstance(tickers, list):
            raise UpstreamError(
                "tickers response has no ticker list",
                endpoint=self._http.url_for(path),
                body=str(data)[:300],
            )

        selected: list[ExchangeTicker] = []
        for raw in tickers:
            if not isinstance(raw, dict):
                continue
            if raw.get("coin_id") != self.coin_id or raw.get("target_coin_id") != self.target_coin_id:
                continue
            selected.append(parse_model(ExchangeTicker, raw, self._http.url_for(path)))
            if len(selected) >= limit:
                break
        return selected
