"""Command registry mapping command identifiers to handlers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any

from kaspabot.errors import RegistrationError
from kaspabot.models import CommandSpec, ReplyPayload

CommandHandler = Callable[[dict[str, Any]], Awaitable[ReplyPayload]]


@dataclass(frozen=True)
class Registration:
    """A command spec bound to its handler."""

    spec: CommandSpec
    handler: CommandHandler


class CommandRegistry:
    """Ordered mapping of command id to (spec, handler).

    Populated once at startup. Iteration follows registration order, which is
    also the order the command set is published in.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Registration] = {}

    def register(self, spec: CommandSpec, handler: CommandHandler) -> None:
        """Bind a handler to a command spec.

        Raises:
            RegistrationError: If a command with the same name exists.
        """
        if spec.name in self._commands:
            raise RegistrationError(f"command '{spec.name}' is already registered")
        self._commands[spec.name] = Registration(spec=spec, handler=handler)

    def get(self, command_id: str) -> Registration | None:
        """Look up a registration, None for unknown commands."""
        return self._commands.get(command_id)

    def specs(self) -> list[CommandSpec]:
        """All registered specs in registration order."""
        return [reg.spec for reg in self._commands.values()]

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)
