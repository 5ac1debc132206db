"""Unit tests for the command registry."""

from __future__ import annotations

from typing import Any

import pytest

from kaspabot.core.registry import CommandRegistry
from kaspabot.errors import RegistrationError
from kaspabot.models import CommandSpec, ReplyPayload


async def _handler(params: dict[str, Any]) -> ReplyPayload:
    return ReplyPayload(title="ok")


def _spec(name: str) -> CommandSpec:
    return CommandSpec(name=name, description=f"{name} command")


class TestCommandRegistry:
    def test_register_and_get(self) -> None:
        registry = CommandRegistry()
        registry.register(_spec("kprice"), _handler)

        registration = registry.get("kprice")
        assert registration is not None
        assert registration.spec.name == "kprice"
        assert registration.handler is _handler
        assert "kprice" in registry
        assert len(registry) == 1

    def test_unknown_command(self) -> None:
        registry = CommandRegistry()
        assert registry.get("nope") is None
        assert "nope" not in registry

    def test_duplicate_rejected(self) -> None:
        registry = CommandRegistry()
        registry.register(_spec("kprice"), _handler)
        with pytest.raises(RegistrationError):
            registry.register(_spec("kprice"), _handler)

    def test_registration_order_preserved(self) -> None:
        registry = CommandRegistry()
        for name in ("kprice", "kexchanges", "kbal"):
            registry.register(_spec(name), _handler)

        assert [s.name for s in registry.specs()] == ["kprice", "kexchanges", "kbal"]
        assert [r.spec.name for r in registry] == ["kprice", "kexchanges", "kbal"]


class TestCommandSpec:
    def test_error_reply_falls_back_to_generic(self) -> None:
        assert _spec("kprice").error_reply == (
            "There was an error while executing the `kprice` command."
        )

    def test_error_reply_uses_failure_message(self) -> None:
        spec = CommandSpec(name="kprice", description="d", failure_message="Nope.")
        assert spec.error_reply == "Nope."

    def test_name_length_limit(self) -> None:
        with pytest.raises(ValueError):
            CommandSpec(name="x" * 33, description="d")
