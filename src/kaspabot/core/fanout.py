"""Concurrent fan-out over several data provider calls."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any


async def gather_all(*calls: Awaitable[Any]) -> tuple[Any, ...]:
    """Run provider calls concurrently and return all results in order.

    Join-all-or-fail-fast: the first exception propagates unchanged and the
    calls still running are cancelled so they do not keep sockets open.

    Args:
        *calls: Awaitables (usually provider coroutines).

    Returns:
        Results in the same order as ``calls``.
    """
    tasks = [asyncio.ensure_future(call) for call in calls]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        raise
    return tuple(results)
