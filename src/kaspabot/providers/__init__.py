"""Upstream HTTP data providers."""

from kaspabot.providers.base import BaseProvider, parse_model
from kaspabot.providers.coingecko import CoinGeckoProvider
from kaspabot.providers.http import JsonHttpClient
from kaspabot.providers.kaspa import KaspaApiProvider

__all__ = [
    "BaseProvider",
    "CoinGeckoProvider",
    "JsonHttpClient",
    "KaspaApiProvider",
    "parse_model",
]
