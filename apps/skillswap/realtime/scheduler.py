"""A timer plus a task body, run on the event loop.

The body runs once when the task starts and then on a fixed cadence. A failed
run is logged and swallowed; the next tick is scheduled regardless. Ticks that
fall inside an overrunning run are skipped.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class TaskState(str, Enum):
    idle = "idle"
    running = "running"


class RecurringTask:
    def __init__(
        self,
        name: str,
        func: Callable[[], Any],
        *,
        interval: float,
        run_on_start: bool = True,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = float(interval)
        self.run_on_start = run_on_start
        self._func = func
        self._state = TaskState.idle
        self._task: asyncio.Task[None] | None = None
        self.runs = 0
        self.failures = 0

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def started(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> bool:
        """Run the body a single time; return False if it raised."""

        self._state = TaskState.running
        self.runs += 1
        try:
            result = self._func()
            if inspect.isawaitable(result):
                await result
        except Exception:
            self.failures += 1
            logger.exception("Recurring task %s failed", self.name)
            return False
        finally:
            self._state = TaskState.idle
        return True

    async def _loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        if self.run_on_start:
            await self.run_once()
        while True:
            next_at += self.interval
            skipped = 0
            # Ticks missed while a run overran are dropped, not replayed.
            while next_at <= loop.time():
                next_at += self.interval
                skipped += 1
            if skipped:
                logger.warning("Recurring task %s skipped %d missed ticks", self.name, skipped)
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            await self.run_once()

    def start(self) -> None:
        if self.started:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop(), name=self.name)
        logger.info("Recurring task %s scheduled every %ss", self.name, self.interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


__all__ = ["RecurringTask", "TaskState"]
