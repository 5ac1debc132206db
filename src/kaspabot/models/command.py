"""Command definition and inbound event models."""

import enum
from typing import Any

from pydantic import BaseModel, Field


class ParameterType(str, enum.Enum):
    """Type tag of a slash command parameter."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"

    def accepts(self, value: Any) -> bool:
        """Whether a runtime value matches this type tag."""
        match self:
            case ParameterType.STRING:
                return isinstance(value, str)
            case ParameterType.INTEGER:
                return isinstance(value, int) and not isinstance(value, bool)
            case ParameterType.NUMBER:
                return isinstance(value, int | float) and not isinstance(value, bool)
            case ParameterType.BOOLEAN:
                return isinstance(value, bool)


class CommandParameter(BaseModel):
    """A typed parameter of a command.

    Attributes:
        name: Parameter name as shown in the Discord client.
        type: Type tag.
        description: Help text shown next to the parameter.
        required: Whether the user must supply it.
    """

    model_config = {"frozen": True}

    name: str
    type: ParameterType = ParameterType.STRING
    description: str = ""
    required: bool = True


class CommandSpec(BaseModel):
    """Immutable description of a user-invocable command.

    Attributes:
        name: Unique command identifier (the slash command name).
        description: Human description published to Discord.
        parameters: Ordered parameter list.
        cooldown_gated: Whether per-user cooldown applies.
        deferred: Whether the interaction is acknowledged before the handler
            runs. Used by commands whose fan-out may exceed Discord's
            three-second initial response deadline.
        failure_message: Reply sent when the handler fails.
    """

    model_config = {"frozen": True}

    name: str = Field(min_length=1, max_length=32)
    description: str = Field(min_length=1, max_length=100)
    parameters: tuple[CommandParameter, ...] = ()
    cooldown_gated: bool = False
    deferred: bool = False
    failure_message: str = ""

    @property
    def error_reply(self) -> str:
        """Failure message, falling back to a generic one."""
        return self.failure_message or (
            f"There was an error while executing the `{self.name}` command."
        )


class CommandEvent(BaseModel):
    """Inbound command invocation delivered by the gateway.

    Attributes:
        command_id: Identifier of the invoked command.
        user_id: Identifier of the invoking user.
        parameters: Parameter values keyed by name.
    """

    command_id: str
    user_id: str
    parameters: dict[str, Any] = Field(default_factory=dict)
