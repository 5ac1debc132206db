"""Kaspa command definitions and handlers."""

from kaspabot.commands.kaspa_commands import (
    ALL_COMMANDS,
    KaspaCommands,
    build_registry,
)

__all__ = ["ALL_COMMANDS", "KaspaCommands", "build_registry"]
