"""Debounced scheduling of pipeline runs on the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RUNNING = "running"


class RunToken:
    """Identity of one pipeline run; cancelled once a newer run starts."""

    def __init__(self, sequence: int):
        self.sequence = sequence
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"RunToken(sequence={self.sequence}, cancelled={self._cancelled})"


class Debouncer:
    """Coalesce calls so ``func`` runs once input has been idle for ``wait`` seconds.

    A call while a timer is armed rearms it. Work already started is never
    interrupted; instead the superseded run's token is cancelled when the next
    run starts, and the run is expected to check it before publishing.

    Args:
        func: Coroutine function called as ``func(token, *args)``.
        wait: Idle window in seconds.
        name: Used in log messages.
    """

    def __init__(
        self,
        func: Callable[..., Awaitable[Any]],
        wait: float,
        name: str = "pipeline",
    ):
        self.func = func
        self.wait = wait
        self.name = name
        self.sequence = 0
        self._timer: asyncio.TimerHandle | None = None
        self._current: RunToken | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> PipelineState:
        if self._timer is not None:
            return PipelineState.PENDING
        if self._tasks:
            return PipelineState.RUNNING
        return PipelineState.IDLE

    def __call__(self, *args: Any) -> None:
        """Arm (or rearm) the timer. Must be called from a running event loop."""
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.wait, self._fire, args)

    def cancel(self) -> None:
        """Disarm a pending timer and cancel the token of the current run."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._current is not None:
            self._current.cancel()

    def _fire(self, args: tuple) -> None:
        self._timer = None
        self.sequence += 1
        if self._current is not None:
            self._current.cancel()
        token = RunToken(self.sequence)
        self._current = token
        logger.debug("%s run %s started", self.name, token.sequence)
        task = asyncio.get_running_loop().create_task(self.func(token, *args))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            # Nobody awaits a debounced run; the last published result stays.
            logger.warning(
                "%s run failed: %s",
                self.name,
                exc,
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def flush(self) -> None:
        """Wait until no timer is armed and every started run has finished."""
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            else:
                await asyncio.sleep(self.wait)
