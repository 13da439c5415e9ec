"""
Probe state owned by a single application instance.

`ProbeState` holds the liveness (`healthy`) and readiness (`ready`) flags.
Handlers run in the worker thread pool, so every access goes through a lock.

`StartupTimer` simulates a slow start: after a fixed delay it forces both
flags back to true. It is started and cancelled by the app lifespan.
"""
from __future__ import annotations

import asyncio
import logging
import threading

logger = logging.getLogger(__name__)


class ProbeState:
    def __init__(self, healthy: bool = True, ready: bool = True) -> None:
        self._lock = threading.Lock()
        self._healthy = healthy
        self._ready = ready

    @property
    def healthy(self) -> bool:
        with self._lock:
            return self._healthy

    @property
    def ready(self) -> bool:
        with self._lock:
            return self._ready

    def snapshot(self) -> dict[str, bool]:
        with self._lock:
            return {"healthy": self._healthy, "ready": self._ready}

    def mark_unhealthy(self) -> None:
        with self._lock:
            self._healthy = False
        logger.info("Marked unhealthy")

    def mark_ready(self) -> None:
        with self._lock:
            self._ready = True
        logger.info("Marked ready")

    def mark_not_ready(self) -> None:
        with self._lock:
            self._ready = False
        logger.info("Marked not ready")

    def mark_started(self) -> None:
        with self._lock:
            self._healthy = True
            self._ready = True


class StartupTimer:
    """One-shot task that calls :meth:`ProbeState.mark_started` after `delay` seconds."""

    def __init__(self, state: ProbeState, delay: float) -> None:
        self.state = state
        self.delay = delay
        self._task: asyncio.Task | None = None

    @property
    def fired(self) -> bool:
        return self._task is not None and self._task.done() and not self._task.cancelled()

    def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        self.state.mark_started()
        logger.info("Startup done! %s", self.state.snapshot())

    async def cancel(self) -> None:
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
