from __future__ import annotations

import asyncio
import contextlib
import time
from typing import Callable

import structlog

from duckclicker.runtime import GameRuntime

log = structlog.get_logger()


class AccrualLoop:
    """Drives ``runtime.accrue`` once per frame with the measured elapsed time.

    Runs as a single asyncio task, so accrual never overlaps with other
    mutations made from the same event loop.
    """

    def __init__(
        self,
        runtime: GameRuntime,
        frame_rate: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        rate = frame_rate or runtime.definition.config.frame_rate
        if rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {rate}")
        self.runtime = runtime
        self.frame_interval = 1.0 / rate
        self.frames = 0
        self._clock = clock
        self._last: float | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> float:
        """Accrue the time since the previous frame. Returns the seconds applied."""
        now = self._clock()
        elapsed = 0.0 if self._last is None else now - self._last
        self._last = now
        self.frames += 1
        if elapsed > 0:
            self.runtime.accrue(elapsed)
        return elapsed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.frame_interval)
            self.tick()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("accrual loop already running")
        self._last = self._clock()
        self._task = asyncio.get_running_loop().create_task(self._run())
        log.debug("loop.started", frame_interval=self.frame_interval)

    async def stop(self) -> None:
        """Cancel the frame task, apply the last partial frame and save."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        self.tick()
        self.runtime.save()
        log.debug("loop.stopped", frames=self.frames)

    async def __aenter__(self) -> AccrualLoop:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
