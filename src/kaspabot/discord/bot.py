"""KaspaBot Discord client.

Integrates with the existing asyncio event loop via `start_bot()`.
Commands are published globally, or to one guild when ``guild_id`` is set
for instant slash command availability during development.
"""

from __future__ import annotations

import logging

import discord
from discord import app_commands

from kaspabot.discord.cogs.slash_commands import register_kaspa_commands
from kaspabot.discord.context import BotContext
from kaspabot.errors import RegistrationError

logger = logging.getLogger(__name__)


class KaspaBotDiscord(discord.Client):
    """Discord client answering the Kaspa slash commands.

    Uses app_commands.CommandTree for slash commands. Interactions are
    forwarded to the dispatcher held by the bot context.

    Args:
        bot_context: Bundle of references to core system components.
        guild_id: Discord guild (server) ID for command scoping. 0 publishes
            the commands globally.
    """

    def __init__(self, bot_context: BotContext, guild_id: int = 0) -> None:
        intents = discord.Intents.default()
        intents.message_content = False
        super().__init__(intents=intents)

        self._bot_context = bot_context
        self._guild_id = guild_id
        self.tree = app_commands.CommandTree(self)

    async def setup_hook(self) -> None:
        """Register commands and publish them.

        Called automatically by discord.py during client startup. A failed
        publish is logged and the bot keeps running with whatever command
        set the platform already knows.
        """
        register_kaspa_commands(self.tree, self._bot_context)
        try:
            await self.publish_commands()
        except RegistrationError as exc:
            logger.error("Discord command registration failed: %s", exc)

    async def publish_commands(self) -> list[app_commands.AppCommand]:
        """Sync the command tree with Discord.

        Raises:
            RegistrationError: If Discord rejects the sync.
        """
        guild = discord.Object(id=self._guild_id) if self._guild_id else None
        if guild is not None:
            self.tree.copy_global_to(guild=guild)
        try:
            synced = await self.tree.sync(guild=guild)
        except discord.HTTPException as exc:
            raise RegistrationError(f"command sync failed: {exc}") from exc

        scope = f"guild {self._guild_id}" if guild is not None else "global"
        logger.info("Discord commands synced (%s): %d commands", scope, len(synced))
        return synced

    async def on_ready(self) -> None:
        """Handle bot ready event."""
        logger.info("Discord bot ready: %s (ID: %s)", self.user, self.user.id if self.user else "?")

    async def start_bot(self) -> None:
        """Start the bot within the current asyncio event loop.

        This wraps `self.start(token)` for use with `asyncio.create_task()`.
        Unlike `run()`, this does not create a new event loop.
        """
        token = self._bot_context.config.discord.bot_token
        await self.start(token)
