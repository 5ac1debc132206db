"""Command dispatch and rate-limiting core."""

from kaspabot.core.cooldown import CooldownStatus, CooldownTracker
from kaspabot.core.dispatcher import CommandDispatcher, ReplyChannel
from kaspabot.core.fanout import gather_all
from kaspabot.core.registry import CommandRegistry, Registration

__all__ = [
    "CommandDispatcher",
    "CommandRegistry",
    "CooldownStatus",
    "CooldownTracker",
    "Registration",
    "ReplyChannel",
    "gather_all",
]
