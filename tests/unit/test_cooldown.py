"""Unit tests for the per-user, per-command cooldown tracker."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from kaspabot.core.cooldown import CooldownStatus, CooldownTracker


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Stores scheduled callbacks so tests can fire them explicitly."""

    def __init__(self) -> None:
        self.scheduled: list[tuple[float, Callable[[], None], FakeHandle]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle()
        self.scheduled.append((delay, callback, handle))
        return handle

    def fire(self, index: int) -> None:
        self.scheduled[index][1]()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def tracker(clock: FakeClock, scheduler: FakeScheduler) -> CooldownTracker:
    return CooldownTracker(window=900, clock=clock, scheduler=scheduler)


class TestCooldownStatus:
    def test_wait_message(self) -> None:
        status = CooldownStatus(blocked=True, remaining=125.4)
        assert status.wait_message("kexchanges") == (
            "Please wait for **2 minutes and 5 seconds** "
            "before reusing the `kexchanges` command."
        )

    def test_remaining_ms(self) -> None:
        assert CooldownStatus(blocked=True, remaining=1.5).remaining_ms == 1500


class TestCooldownTracker:
    def test_rejects_non_positive_window(self) -> None:
        with pytest.raises(ValueError):
            CooldownTracker(window=0)

    def test_unrecorded_user_is_not_blocked(self, tracker: CooldownTracker) -> None:
        assert tracker.check("u1", "kexchanges").blocked is False

    def test_blocked_until_window_elapses(
        self, tracker: CooldownTracker, clock: FakeClock
    ) -> None:
        tracker.record("u1", "kexchanges")

        clock.advance(899)
        status = tracker.check("u1", "kexchanges")
        assert status.blocked is True
        assert status.remaining == pytest.approx(1.0)

        clock.advance(1)
        assert tracker.check("u1", "kexchanges").blocked is False

    def test_remaining_reported_in_seconds(self, tracker: CooldownTracker, clock: FakeClock) -> None:
        tracker.record("u1", "kexchanges")
        clock.advance(125)
        status = tracker.check("u1", "kexchanges")
        assert status.remaining == pytest.approx(775.0)
        assert "12 minutes and 55 seconds" in status.wait_message("kexchanges")

    def test_commands_are_independent(self, tracker: CooldownTracker) -> None:
        tracker.record("u1", "kexchanges")
        assert tracker.check("u1", "kcoingecko").blocked is False

    def test_users_are_independent(self, tracker: CooldownTracker) -> None:
        tracker.record("u1", "kexchanges")
        assert tracker.check("u2", "kexchanges").blocked is False

    def test_check_uses_explicit_time(self, tracker: CooldownTracker) -> None:
        tracker.record("u1", "kexchanges", now=100.0)
        assert tracker.check("u1", "kexchanges", now=999.0).blocked is True
        assert tracker.check("u1", "kexchanges", now=1000.0).blocked is False

    def test_cleanup_scheduled_relative_to_invocation_time(
        self, tracker: CooldownTracker, clock: FakeClock, scheduler: FakeScheduler
    ) -> None:
        clock.advance(5)
        tracker.record("u1", "kexchanges", now=100.0)

        delay, _, _ = scheduler.scheduled[0]
        assert delay == pytest.approx(895.0)
        assert tracker.table["u1"]["kexchanges"] == 100.0

    def test_cleanup_removes_entry_and_empty_user(
        self, tracker: CooldownTracker, scheduler: FakeScheduler
    ) -> None:
        tracker.record("u1", "kexchanges")
        assert tracker.active_users == 1

        scheduler.fire(0)
        assert "u1" not in tracker.table
        assert tracker.active_users == 0
        assert len(tracker) == 0

    def test_cleanup_keeps_other_commands(
        self, tracker: CooldownTracker, scheduler: FakeScheduler
    ) -> None:
        tracker.record("u1", "kexchanges")
        tracker.record("u1", "kcoingecko")
        assert len(tracker) == 2

        scheduler.fire(0)
        assert tracker.table == {"u1": {"kcoingecko": 100.0}}

    def test_stale_cleanup_leaves_newer_entry(
        self, tracker: CooldownTracker, clock: FakeClock, scheduler: FakeScheduler
    ) -> None:
        tracker.record("u1", "kexchanges")
        clock.advance(1000)
        tracker.record("u1", "kexchanges")

        scheduler.fire(0)
        assert tracker.table["u1"]["kexchanges"] == 1100.0

        scheduler.fire(1)
        assert tracker.table == {}

    def test_cleanup_is_idempotent(
        self, tracker: CooldownTracker, scheduler: FakeScheduler
    ) -> None:
        tracker.record("u1", "kexchanges")
        scheduler.fire(0)
        scheduler.fire(0)
        assert tracker.table == {}

    def test_shared_table(self, clock: FakeClock, scheduler: FakeScheduler) -> None:
        table: dict[str, dict[str, float]] = {}
        tracker = CooldownTracker(window=60, table=table, clock=clock, scheduler=scheduler)
        tracker.record("u1", "kexchanges")
        assert table == {"u1": {"kexchanges": 100.0}}

    def test_close_cancels_pending_cleanups(
        self, tracker: CooldownTracker, scheduler: FakeScheduler
    ) -> None:
        tracker.record("u1", "kexchanges")
        tracker.record("u2", "kexchanges")

        tracker.close()
        assert all(handle.cancelled for _, _, handle in scheduler.scheduled)


class TestLoopScheduler:
    async def test_entry_expires_on_event_loop(self) -> None:
        tracker = CooldownTracker(window=0.01)
        tracker.record("u1", "kexchanges")
        assert tracker.check("u1", "kexchanges").blocked is True

        await asyncio.sleep(0.05)
        assert tracker.table == {}
        tracker.close()
