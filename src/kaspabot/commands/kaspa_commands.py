"""Kaspa slash command definitions and handlers."""

from __future__ import annotations

from typing import Any

from kaspabot.config import CommandsConfig
from kaspabot.core.fanout import gather_all
from kaspabot.core.registry import CommandRegistry
from kaspabot.errors import NoDataError
from kaspabot.formatting import (
    format_amount,
    format_halving,
    format_hashrate,
    format_integer,
    format_number,
    group_digits,
)
from kaspabot.models import CommandParameter, CommandSpec, ParameterType, ReplyPayload
from kaspabot.providers import CoinGeckoProvider, KaspaApiProvider

ADDRESS_OPTION = "kaspaddress"

PRICE = CommandSpec(
    name="kprice",
    description="Get the current Kaspa market data",
    failure_message="There was an error fetching the Kaspa market data.",
)
EXCHANGES = CommandSpec(
    name="kexchanges",
    description="Get the top Kaspa exchanges with highest trading volume",
    failure_message="There was an error fetching the Kaspa exchanges data.",
)
BALANCE = CommandSpec(
    name="kbal",
    description="Get the balance, UTXOs, and transaction count of a Kaspa address",
    parameters=(
        CommandParameter(
            name=ADDRESS_OPTION,
            type=ParameterType.STRING,
            description="The Kaspa address to check",
            required=True,
        ),
    ),
    failure_message="There was an error fetching the Kaspa address details.",
)
MARKET_DATA = CommandSpec(
    name="kcoingecko",
    description="Get Kaspa market data from CoinGecko",
    failure_message="There was an error fetching the Kaspa market data from CoinGecko.",
)
CHAIN_DETAILS = CommandSpec(
    name="khash-details",
    description="Get various details about the Kaspa blockchain",
    deferred=True,
    failure_message="There was an error while fetching Kaspa blockchain details.",
)

ALL_COMMANDS = (PRICE, EXCHANGES, BALANCE, MARKET_DATA, CHAIN_DETAILS)


class KaspaCommands:
    """Handlers for the Kaspa commands.

    Each handler takes the validated parameters and returns a ReplyPayload.
    Provider errors propagate to the dispatcher.

    Args:
        kaspa: Kaspa REST API provider.
        coingecko: CoinGecko provider.
        exchange_limit: Number of exchanges listed by ``kexchanges``.
    """

    def __init__(
        self,
        kaspa: KaspaApiProvider,
        coingecko: CoinGeckoProvider,
        exchange_limit: int = 9,
    ) -> None:
        self._kaspa = kaspa
        self._coingecko = coingecko
        self._exchange_limit = exchange_limit

    async def price(self, params: dict[str, Any]) -> ReplyPayload:
        """Current price and market cap."""
        price, market_cap = await gather_all(
            self._kaspa.get_price(),
            self._kaspa.get_market_cap(),
        )
        reply = ReplyPayload(title="Kaspa Price & Market Data")
        reply.add_field("💵 Current Kaspa Price", f"${price.price:.6f} KAS")
        reply.add_field("📊 Market Cap", f"${format_number(market_cap.marketcap)}")
        return reply

    async def exchanges(self, params: dict[str, Any]) -> ReplyPayload:
        """Top exchanges by trust score."""
        tickers = await self._coingecko.get_top_exchanges(self._exchange_limit)
        if not tickers:
            raise NoDataError("No Kaspa exchange listings found on CoinGecko.")

        reply = ReplyPayload(
            title="📊 Top Kaspa Exchanges",
            description="**Kaspa Exchange Data**",
        )
        for rank, ticker in enumerate(tickers, start=1):
            lines = [
                f"🔄 **Pair:** {ticker.base}/{ticker.target}",
                f"💵 **Price:** ${format_amount(ticker.last)}",
                f"📊 **Volume:** ${format_number(ticker.volume)}",
            ]
            if ticker.trade_url:
                lines.append(f"[🔍 VIEW]({ticker.trade_url})")
            reply.add_field(f"**{rank}. {ticker.market.name}**", "\n".join(lines), inline=True)
        return reply

    async def balance(self, params: dict[str, Any]) -> ReplyPayload:
        """Balance, UTXO and transaction count of an address."""
        address = params[ADDRESS_OPTION]
        details = await self._kaspa.get_address_details(address)
        return ReplyPayload(
            title="🔍 Kaspa Address Details",
            description=(
                f"**📍 Address:** {details.address}\n"
                f"**💰 Balance:** {format_amount(details.balance)} KAS\n"
                f"**🔗 UTXOs:** {details.utxo_count:,}\n"
                f"**📈 Transaction Count:** {details.transaction_count:,}"
            ),
        )

    async def market_data(self, params: dict[str, Any]) -> ReplyPayload:
        """CoinGecko market overview."""
        data = await self._coingecko.get_market_data()
        if data is None:
            raise NoDataError("No data found for Kaspa on CoinGecko.")

        reply = ReplyPayload(
            title="📈 Kaspa Market Data",
            description="**Kaspa CoinGecko Data**",
        )
        reply.add_field("📊 **Current Price**", f"${data.current_price:.4f}", inline=True)
        reply.add_field("💰 **Market Cap**", f"${format_number(data.market_cap)}", inline=True)
        reply.add_field("📈 **24h Volume**", f"${format_number(data.total_volume)}", inline=True)
        reply.add_field(
            "🔄 **Change (24h)**", f"{data.price_change_percentage_24h:.2f}%", inline=True
        )
        reply.add_field("🚀 **ATH-24H**", f"${data.high_24h:.4f}", inline=True)
        reply.add_field("📉 **ATL-24H**", f"${data.low_24h:.4f}", inline=True)
        return reply

    async def chain_details(self, params: dict[str, Any]) -> ReplyPayload:
        """Hashrate, rewards and BlockDAG summary from five sources."""
        halving, reward, hashrate, blue_score, blockdag = await gather_all(
            self._kaspa.get_halving(),
            self._kaspa.get_block_reward(),
            self._kaspa.get_hashrate(),
            self._kaspa.get_blue_score(),
            self._kaspa.get_blockdag(),
        )

        reply = ReplyPayload(
            title="🔗 Kaspa Blockchain Details",
            description="**Various details about the Kaspa blockchain:**",
        )
        reply.add_field("📊 **Current Hashrate**", f"```{format_hashrate(hashrate)}```")
        reply.add_field("🎁 **Rewards**", "```\nReward Information\n```")
        reply.add_field("💰 **Current Reward**", f"{format_amount(reward.blockreward)} KAS", inline=True)
        reply.add_field(
            "⏳ **Next Halving**",
            format_halving(halving.next_halving_amount, halving.next_halving_timestamp),
            inline=True,
        )
        reply.add_field("🔗 **BlockDAG Details**", "```\nNetwork Information\n```")
        reply.add_field("🌐 **Network Name**", blockdag.network_name)
        reply.add_field("🧱 **Block Count**", group_digits(blockdag.block_count), inline=True)
        reply.add_field("📑 **Header Count**", group_digits(blockdag.header_count), inline=True)
        reply.add_field("📘 **Blue Score**", format_integer(blue_score.blue_score), inline=True)
        return reply


def build_registry(
    kaspa: KaspaApiProvider,
    coingecko: CoinGeckoProvider,
    config: CommandsConfig | None = None,
) -> CommandRegistry:
    """Register every Kaspa command.

    Cooldown gating comes from ``config.cooldown_commands`` so it can be
    changed without touching the command definitions.

    Args:
        kaspa: Kaspa REST API provider.
        coingecko: CoinGecko provider.
        config: Command settings. Defaults if omitted.

    Returns:
        Registry with the five commands in publishing order.
    """
    config = config or CommandsConfig()
    handlers = KaspaCommands(kaspa, coingecko, exchange_limit=config.exchange_limit)
    bound = {
        PRICE.name: handlers.price,
        EXCHANGES.name: handlers.exchanges,
        BALANCE.name: handlers.balance,
        MARKET_DATA.name: handlers.market_data,
        CHAIN_DETAILS.name: handlers.chain_details,
    }

    gated = set(config.cooldown_commands)
    registry = CommandRegistry()
    for spec in ALL_COMMANDS:
        spec = spec.model_copy(update={"cooldown_gated": spec.name in gated})
        registry.register(spec, bound[spec.name])
    return registry
