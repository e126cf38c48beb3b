"""Tick scheduler — fixed-interval driver for the analysis pipeline.

Runs one tick immediately on start and then one per interval. A tick always
runs to completion before the next wait begins, so ticks never overlap.
Stopping cancels the token; it never interrupts a tick already in progress.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from ..utils.logging import get_logger

logger = get_logger("engine.scheduler")

TickCallback = Callable[[], Awaitable[None]]


class CancellationToken:
    """One-shot cancellation flag that a waiting loop can block on."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds. Returns True if cancelled meanwhile."""
        if self.cancelled:
            return True
        if timeout <= 0:
            return False
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False


class TickScheduler:
    """Invokes an async tick callback every ``interval`` seconds."""

    def __init__(self, interval: float, tick: TickCallback):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._tick = tick
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None
        self._completed = 0
        self._failed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def completed_ticks(self) -> int:
        return self._completed

    @property
    def failed_ticks(self) -> int:
        return self._failed

    async def start(self) -> CancellationToken:
        """Start ticking. Returns the token that stops this run."""
        if self.running and self._token is not None:
            return self._token
        self._token = CancellationToken()
        self._task = asyncio.create_task(self._run(self._token))
        logger.info("scheduler_started", interval=self.interval)
        return self._token

    async def stop(self) -> None:
        """Stop scheduling further ticks and wait for the in-flight tick to finish."""
        if self._token is not None:
            self._token.cancel()
        if self._task is not None:
            await self._task
            self._task = None
        logger.info("scheduler_stopped", completed=self._completed, failed=self._failed)

    async def _run(self, token: CancellationToken) -> None:
        loop = asyncio.get_running_loop()
        while not token.cancelled:
            started = loop.time()
            try:
                await self._tick()
                self._completed += 1
            except Exception as e:
                self._failed += 1
                logger.error("tick_failed", error=str(e))
            remaining = self.interval - (loop.time() - started)
            if await token.wait(remaining):
                break
