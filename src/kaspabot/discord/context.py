"""Bot context bundle for Discord command handlers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kaspabot.config import AppConfig
from kaspabot.core.dispatcher import CommandDispatcher


@dataclass
class BotContext:
    """References to core components for Discord commands.

    Passed to the slash command registration so every command can hand its
    interaction to the dispatcher.

    Args:
        config: Application configuration.
        dispatcher: Command dispatcher (owns the registry and cooldowns).
        logo_path: Static logo attached as reply thumbnail, if present.
    """

    config: AppConfig
    dispatcher: CommandDispatcher
    logo_path: Path | None = None
