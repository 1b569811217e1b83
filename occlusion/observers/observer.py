from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

###############################################################################
# Observer base class                                                         #
###############################################################################

class Observer(ABC):
    """Background asyncio worker that pushes items onto ``update_queue``.

    The worker task starts as soon as the observer is constructed, so
    construction must happen inside a running event loop.  ``None`` on the
    queue marks the end of the stream.
    """

    _MAX_PENDING: int = 64              # oldest items are dropped beyond this

    def __init__(self, name: Optional[str] = None) -> None:
        self._name = name or self.__class__.__name__

        self.update_queue: asyncio.Queue = asyncio.Queue(maxsize=self._MAX_PENDING)
        self._running = True
        self._wakeup = asyncio.Event()

        self._task = asyncio.create_task(self._worker(), name=self._name)

    # ───────────────────────── subclass hook
    @abstractmethod
    async def _worker(self) -> None:
        ...

    # ───────────────────────── helpers for subclasses
    @property
    def name(self) -> str:
        return self._name

    @property
    def is_running(self) -> bool:
        return self._running and not self._task.done()

    def _publish(self, item: Any) -> None:
        if self.update_queue.full():
            self.update_queue.get_nowait()
        self.update_queue.put_nowait(item)

    async def _sleep(self, seconds: float) -> None:
        """Sleep for *seconds*, returning early once ``stop()`` is called."""
        try:
            await asyncio.wait_for(self._wakeup.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    # ───────────────────────── lifecycle
    async def stop(self) -> None:
        """Stop future ticks and wait for the worker to finish its current one.

        Exceptions raised inside the worker are re-raised here.
        """
        self._running = False
        self._wakeup.set()
        if asyncio.current_task() is self._task:
            return  # called from within the worker (e.g. a handler)
        await self._task
