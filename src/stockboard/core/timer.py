"""Repeating timer with explicit arm/cancel semantics."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], Awaitable[None]]


class Timer(Protocol):
    """A repeating scheduled task that can be armed and cancelled."""

    @property
    def armed(self) -> bool:
        ...

    def arm(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, TimerCallback], Timer]


class PeriodicTimer:
    """
    Fires a coroutine callback every ``interval_seconds`` on the running loop.

    Each firing runs as its own task, so cancelling the timer stops future
    firings without cancelling a callback that is already in flight.
    """

    def __init__(
        self,
        interval_seconds: float,
        callback: TimerCallback,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._interval = interval_seconds
        self._callback = callback
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self) -> None:
        if self.armed:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await self._sleep(self._interval)
            task = asyncio.get_running_loop().create_task(self._fire())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)

    async def _fire(self) -> None:
        try:
            await self._callback()
        except Exception:
            logger.exception("Timer callback failed")
