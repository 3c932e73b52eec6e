"""
Periodic tick scheduling for engines.

A TickLoop owns at most one asyncio task. The task fires one tick shortly
after start and then one tick per interval until cancelled. Ticks run
synchronously inside the task, so a tick always completes before the next
one can begin. Restarting (e.g. on a speed change) cancels the previous
task first; progress toward the next tick is discarded.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import Callable

FIRST_TICK_DELAY_MS = 100


class TickLoop:
    """
    Manage the repeating tick task for a single engine.

    on_tick returns False when the engine no longer wants ticks (the game
    ended); the loop then stops itself.
    """

    def __init__(self, on_tick: Callable[[], bool], first_tick_delay_ms: int = FIRST_TICK_DELAY_MS) -> None:
        self._on_tick = on_tick
        self._first_tick_delay_ms = first_tick_delay_ms
        self._active_task: asyncio.Task[None] | None = None
        self._interval_ms: int | None = None

    @property
    def running(self) -> bool:
        return self._active_task is not None and not self._active_task.done()

    @property
    def interval_ms(self) -> int | None:
        """Interval of the running loop, None when stopped."""
        return self._interval_ms if self.running else None

    def start(self, interval_ms: int) -> bool:
        """
        Start ticking every interval_ms milliseconds.

        Returns False when there is no running event loop or the interval is
        not positive; the loop stays stopped in that case.
        """
        self.cancel()
        if interval_ms <= 0:
            logger.warning("tick loop not started: interval must be positive", interval_ms=interval_ms)
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("tick loop not started: no running event loop", interval_ms=interval_ms)
            return False
        self._interval_ms = interval_ms
        self._active_task = loop.create_task(self._run(interval_ms))
        return True

    def cancel(self) -> bool:
        """Cancel the active task. Returns True if a running task was cancelled."""
        was_running = self.running
        if self._active_task is not None and not self._active_task.done():
            # a tick may stop its own loop; never cancel the task we are running in
            if self._active_task is not asyncio.current_task():
                self._active_task.cancel()
        self._active_task = None
        self._interval_ms = None
        return was_running

    def _tick(self) -> bool:
        try:
            wants_more = self._on_tick()
        except Exception:
            logger.exception("tick failed")
            wants_more = True
        # the tick itself may have stopped or restarted this loop
        return wants_more and self._active_task is asyncio.current_task()

    async def _run(self, interval_ms: int) -> None:
        first_delay_ms = min(self._first_tick_delay_ms, interval_ms)
        try:
            await asyncio.sleep(first_delay_ms / 1000)
            if not self._tick():
                return
            await asyncio.sleep((interval_ms - first_delay_ms) / 1000)
            while True:
                if not self._tick():
                    return
                await asyncio.sleep(interval_ms / 1000)
        except asyncio.CancelledError:
            pass
