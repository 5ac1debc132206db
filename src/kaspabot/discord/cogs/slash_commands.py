"""Kaspa slash commands for the Discord bot."""

from __future__ import annotations

import discord
from discord import app_commands

from kaspabot.commands.kaspa_commands import (
    ADDRESS_OPTION,
    BALANCE,
    CHAIN_DETAILS,
    EXCHANGES,
    MARKET_DATA,
    PRICE,
)
from kaspabot.discord.context import BotContext
from kaspabot.discord.gateway import InteractionReplyChannel, event_from_interaction


async def handle_interaction(
    interaction: discord.Interaction, ctx: BotContext, **parameters: object
) -> bool:
    """Hand a slash command interaction to the dispatcher."""
    event = event_from_interaction(interaction, **parameters)
    channel = InteractionReplyChannel(interaction, ctx.logo_path)
    return await ctx.dispatcher.dispatch(event, channel)


def register_kaspa_commands(tree: app_commands.CommandTree, ctx: BotContext) -> None:
    """Register all Kaspa slash commands on the command tree.

    Args:
        tree: Discord command tree to register commands on.
        ctx: Bot context with references to system components.
    """

    @tree.command(name=PRICE.name, description=PRICE.description)
    async def price_command(interaction: discord.Interaction) -> None:
        await handle_interaction(interaction, ctx)

    @tree.command(name=EXCHANGES.name, description=EXCHANGES.description)
    async def exchanges_command(interaction: discord.Interaction) -> None:
        await handle_interaction(interaction, ctx)

    @tree.command(name=BALANCE.name, description=BALANCE.description)
    @app_commands.describe(kaspaddress=BALANCE.parameters[0].description)
    async def balance_command(interaction: discord.Interaction, kaspaddress: str) -> None:
        await handle_interaction(interaction, ctx, **{ADDRESS_OPTION: kaspaddress})

    @tree.command(name=MARKET_DATA.name, description=MARKET_DATA.description)
    async def market_data_command(interaction: discord.Interaction) -> None:
        await handle_interaction(interaction, ctx)

    @tree.command(name=CHAIN_DETAILS.name, description=CHAIN_DETAILS.description)
    async def chain_details_command(interaction: discord.Interaction) -> None:
        """Fans out to five endpoints, so the reply is deferred."""
        await handle_interaction(interaction, ctx)
