"""Per-user, per-command cooldown tracking with automatic expiry.

The table is a plain ``dict[user_id, dict[command_id, timestamp]]`` owned by
the dispatcher and handed to the tracker, so tests can inspect it directly
and drive the tracker with a fake clock and scheduler.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from kaspabot.formatting import split_wait
from kaspabot.logging import get_logger

logger = get_logger("cooldown")

DEFAULT_WINDOW_SECONDS = 15 * 60.0

CooldownTable = dict[str, dict[str, float]]


class Cancellable(Protocol):
    """Handle returned by a scheduler (asyncio.TimerHandle satisfies it)."""

    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> Cancellable:
    """Schedule ``callback`` on the running event loop after ``delay`` seconds."""
    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass(frozen=True)
class CooldownStatus:
    """Result of a cooldown check.

    Attributes:
        blocked: Whether the command may not be invoked right now.
        remaining: Seconds until the command becomes available again.
    """

    blocked: bool
    remaining: float = 0.0

    @property
    def remaining_ms(self) -> int:
        """Remaining wait in whole milliseconds."""
        return int(self.remaining * 1000)

    def wait_message(self, command_name: str) -> str:
        """Human-readable reply telling the user how long to wait."""
        minutes, seconds = split_wait(self.remaining)
        return (
            f"Please wait for **{minutes} minutes and {seconds} seconds** "
            f"before reusing the `{command_name}` command."
        )


class CooldownTracker:
    """In-memory rate limiter keyed by (user, command).

    An entry blocks its command for ``window`` seconds after the recorded
    timestamp. Each recorded entry schedules a cleanup that removes exactly
    that entry once the window has elapsed, and drops the user's record when
    it becomes empty. Cleanup compares the stored timestamp first, so a
    cleanup left behind by an overwritten entry does nothing.

    The tracker is only touched from the event loop thread, so it holds no
    lock. Callers running it from several threads must serialize access.

    Args:
        window: Cooldown window in seconds.
        table: Shared state object. A fresh empty table if omitted.
        clock: Returns the current time in seconds.
        scheduler: Schedules a callback after a delay in seconds.
    """

    def __init__(
        self,
        window: float = DEFAULT_WINDOW_SECONDS,
        table: CooldownTable | None = None,
        clock: Callable[[], float] = time.monotonic,
        scheduler: Scheduler = loop_scheduler,
    ) -> None:
        if window <= 0:
            raise ValueError(f"cooldown window must be positive, got {window}")
        self._window = window
        self._table: CooldownTable = table if table is not None else {}
        self._clock = clock
        self._scheduler = scheduler
        self._pending: set[Cancellable] = set()

    @property
    def window(self) -> float:
        """Cooldown window in seconds."""
        return self._window

    @property
    def table(self) -> CooldownTable:
        """The underlying state table."""
        return self._table

    @property
    def active_users(self) -> int:
        """Number of users holding at least one entry."""
        return len(self._table)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._table.values())

    def now(self) -> float:
        """Current time according to the tracker's clock."""
        return self._clock()

    def check(self, user_id: str, command_id: str, now: float | None = None) -> CooldownStatus:
        """Check whether ``user_id`` is blocked on ``command_id``.

        Args:
            user_id: Invoking user.
            command_id: Command being invoked.
            now: Time of the check. Defaults to the tracker clock.

        Returns:
            Status with the remaining wait when blocked.
        """
        if now is None:
            now = self._clock()
        last = self._table.get(user_id, {}).get(command_id)
        if last is None:
            return CooldownStatus(blocked=False)

        expiration = last + self._window
        if now < expiration:
            return CooldownStatus(blocked=True, remaining=expiration - now)
        return CooldownStatus(blocked=False)

    def record(self, user_id: str, command_id: str, now: float | None = None) -> None:
        """Record a successful invocation and schedule its expiry.

        The cleanup fires ``window`` seconds after ``now``, not after the
        moment this method runs.

        Args:
            user_id: Invoking user.
            command_id: Command that succeeded.
            now: Invocation time. Defaults to the tracker clock.
        """
        if now is None:
            now = self._clock()
        self._table.setdefault(user_id, {})[command_id] = now

        delay = max(0.0, now + self._window - self._clock())
        handle: Cancellable | None = None

        def _expire() -> None:
            if handle is not None:
                self._pending.discard(handle)
            self._cleanup(user_id, command_id, now)

        handle = self._scheduler(delay, _expire)
        self._pending.add(handle)
        logger.debug(
            "cooldown_recorded",
            user_id=user_id,
            command=command_id,
            expires_in=round(delay, 3),
        )

    def _cleanup(self, user_id: str, command_id: str, stamp: float) -> None:
        entries = self._table.get(user_id)
        if entries is None or entries.get(command_id) != stamp:
            return
        del entries[command_id]
        if not entries:
            del self._table[user_id]
        logger.debug("cooldown_expired", user_id=user_id, command=command_id)

    def close(self) -> None:
        """Cancel all pending cleanup timers (used at shutdown)."""
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()
