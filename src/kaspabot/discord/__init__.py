"""Discord bot integration for KaspaBot."""

from kaspabot.discord.bot import KaspaBotDiscord
from kaspabot.discord.context import BotContext
from kaspabot.discord.gateway import InteractionReplyChannel, render_payload

__all__ = [
    "BotContext",
    "InteractionReplyChannel",
    "KaspaBotDiscord",
    "render_payload",
]
