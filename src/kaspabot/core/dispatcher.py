"""Command dispatcher: validation, cooldown gating, invocation and reply.

The dispatcher is the error boundary of the bot. Nothing raised by a handler
or a data provider escapes ``dispatch``; failures become a per-command reply
and a log line.
"""

from __future__ import annotations

import time
from typing import Any, Protocol, runtime_checkable

from kaspabot.core.cooldown import CooldownTracker
from kaspabot.core.registry import CommandRegistry
from kaspabot.errors import NoDataError, UpstreamError, ValidationError
from kaspabot.logging import get_logger, log_context
from kaspabot.models import CommandEvent, CommandSpec, ReplyPayload
from kaspabot.monitoring.metrics import MetricsCollector

logger = get_logger("dispatcher")


@runtime_checkable
class ReplyChannel(Protocol):
    """Two-phase reply protocol implemented by the gateway adapter.

    ``acknowledge`` must happen within the platform's response deadline;
    ``deliver``/``deliver_text`` send the final content, editing the
    acknowledged response when there is one.
    """

    async def acknowledge(self) -> None:
        """Tell the platform a reply is coming."""
        ...

    async def deliver(self, payload: ReplyPayload) -> None:
        """Send the final structured reply."""
        ...

    async def deliver_text(self, text: str) -> None:
        """Send a plain text reply."""
        ...


def validate_parameters(spec: CommandSpec, parameters: dict[str, Any]) -> dict[str, Any]:
    """Check parameters against the command definition, dropping unknown ones.

    Args:
        spec: Command definition.
        parameters: Raw parameter values from the gateway.

    Returns:
        Declared parameters only, with absent optional ones omitted.

    Raises:
        ValidationError: On a missing required or mistyped parameter.
    """
    validated: dict[str, Any] = {}
    for param in spec.parameters:
        value = parameters.get(param.name)
        if value is None or value == "":
            if param.required:
                raise ValidationError(
                    f"Missing required option `{param.name}` for `/{spec.name}`."
                )
            continue
        if not param.type.accepts(value):
            raise ValidationError(
                f"Option `{param.name}` must be a {param.type.value}."
            )
        validated[param.name] = value.strip() if isinstance(value, str) else value
    return validated


class CommandDispatcher:
    """Routes command events to their handlers.

    Args:
        registry: Registered commands.
        cooldowns: Tracker consulted for cooldown-gated commands.
        metrics: Optional Prometheus collector.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        cooldowns: CooldownTracker,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._registry = registry
        self._cooldowns = cooldowns
        self._metrics = metrics
        if metrics is not None:
            metrics.watch_cooldowns(lambda: len(cooldowns))

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def cooldowns(self) -> CooldownTracker:
        return self._cooldowns

    async def dispatch(self, event: CommandEvent, channel: ReplyChannel) -> bool:
        """Handle one inbound command event.

        Every log line emitted while handling it, including provider logs,
        carries the command and user id.

        Args:
            event: The command invocation.
            channel: Where replies go.

        Returns:
            True if the handler ran and its reply was delivered.
        """
        with log_context(command=event.command_id, user_id=event.user_id):
            return await self._dispatch(event, channel)

    async def _dispatch(self, event: CommandEvent, channel: ReplyChannel) -> bool:
        registration = self._registry.get(event.command_id)
        if registration is None:
            logger.debug("unknown_command_ignored")
            return False

        spec = registration.spec
        now = self._cooldowns.now()
        if self._metrics is not None:
            self._metrics.commands_invoked.labels(command=spec.name).inc()

        try:
            parameters = validate_parameters(spec, event.parameters)
        except ValidationError as e:
            logger.info("command_parameters_invalid", reason=str(e))
            self._count_failure(spec, e)
            await self._safe_text(channel, str(e))
            return False

        if spec.cooldown_gated:
            status = self._cooldowns.check(event.user_id, spec.name, now)
            if status.blocked:
                logger.info("command_on_cooldown", remaining_ms=status.remaining_ms)
                if self._metrics is not None:
                    self._metrics.cooldown_rejections.labels(command=spec.name).inc()
                await self._safe_text(channel, status.wait_message(spec.name))
                return False

        started = time.perf_counter()
        try:
            if spec.deferred:
                await channel.acknowledge()
            payload = await registration.handler(parameters)
            await channel.deliver(payload)
        except NoDataError as e:
            logger.warning("command_no_data", reason=str(e))
            self._count_failure(spec, e)
            await self._safe_text(channel, str(e))
            return False
        except UpstreamError as e:
            logger.error(
                "command_upstream_failed",
                endpoint=e.endpoint,
                status=e.status,
                error=str(e),
            )
            self._count_failure(spec, e)
            await self._safe_text(channel, spec.error_reply)
            return False
        except Exception as e:
            logger.exception("command_failed")
            self._count_failure(spec, e)
            await self._safe_text(channel, spec.error_reply)
            return False
        finally:
            if self._metrics is not None:
                self._metrics.command_latency.labels(command=spec.name).observe(
                    time.perf_counter() - started
                )

        if spec.cooldown_gated:
            self._cooldowns.record(event.user_id, spec.name, now)
        if self._metrics is not None:
            self._metrics.commands_succeeded.labels(command=spec.name).inc()
        logger.info("command_completed")
        return True

    def _count_failure(self, spec: CommandSpec, error: Exception) -> None:
        if self._metrics is not None:
            self._metrics.commands_failed.labels(
                command=spec.name, error=type(error).__name__
            ).inc()

    @staticmethod
    async def _safe_text(channel: ReplyChannel, text: str) -> None:
        """Deliver a text reply, logging instead of raising on failure."""
        try:
            await channel.deliver_text(text)
        except Exception:
            logger.exception("reply_delivery_failed")
