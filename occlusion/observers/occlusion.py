from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, AsyncIterator, Awaitable, Callable, Hashable, Optional, Union

# — Local —
from ..config import OcclusionConfig
from ..errors import OcclusionError
from ..schemas import OcclusionResult
from .observer import Observer

if TYPE_CHECKING:
    from ..calculator import OcclusionCalculator

Handler = Callable[[OcclusionResult], Union[None, Awaitable[None]]]

###############################################################################
# Emit policy                                                                 #
###############################################################################

class ChangeDetector:
    """Decide whether a freshly computed coverage is worth emitting.

    With ``epsilon == 0`` coverages are compared with exact float equality:
    the same snapshot always produces a bit-identical coverage, so anything
    else is a real change.
    """

    def __init__(self, emit_only_changes: bool = True, epsilon: float = 0.0) -> None:
        self.emit_only_changes = emit_only_changes
        self.epsilon = epsilon
        self.last: Optional[float] = None

    def should_emit(self, coverage: float) -> bool:
        previous, self.last = self.last, coverage
        if not self.emit_only_changes or previous is None:
            return True
        if self.epsilon == 0.0:
            return coverage != previous
        return abs(coverage - previous) > self.epsilon

###############################################################################
# Polling observer                                                            #
###############################################################################

class OcclusionObserver(Observer):
    """Poll one surface's occlusion and forward results as they change.

    Results reach the caller three ways, all fed by the same loop:

    * ``handler`` – plain or ``async`` callable invoked per emitted result
    * ``async for result in observer`` – pull-style iteration
    * ``observer.update_queue`` – the raw queue (``None`` ends the stream)

    Any :class:`OcclusionError` (the surface closed, the provider failed)
    ends the observation; the error is kept on ``observer.error``.
    """

    # ───────────────────────── construction
    def __init__(
        self,
        calculator: "OcclusionCalculator",
        target_id: Hashable,
        interval: Optional[float] = None,
        handler: Optional[Handler] = None,
        emit_only_changes: Optional[bool] = None,
        config: Optional[OcclusionConfig] = None,
        debug: Optional[bool] = None,
    ) -> None:

        cfg = config or OcclusionConfig()
        if interval is not None and interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")

        self.calculator = calculator
        self.target_id = target_id
        self.interval = cfg.poll_interval if interval is None else interval
        self.handler = handler
        self.threshold = cfg.default_threshold
        self.debug = cfg.debug if debug is None else debug

        self.detector = ChangeDetector(
            emit_only_changes=cfg.emit_only_changes if emit_only_changes is None else emit_only_changes,
            epsilon=cfg.change_epsilon,
        )

        self.last_result: Optional[OcclusionResult] = None
        self.error: Optional[OcclusionError] = None
        self._exhausted = False

        super().__init__(name=f"occlusion-{target_id}")

    # ───────────────────────── emission
    async def _emit(self, result: OcclusionResult) -> None:
        if self.handler is not None:
            ret = self.handler(result)
            if inspect.isawaitable(ret):
                await ret
        self._publish(result)

    # ───────────────────────── main async worker
    async def _worker(self) -> None:
        log = logging.getLogger("Occlusion.observer")
        if self.debug:
            logging.basicConfig(level=logging.INFO,
                                format="%(asctime)s [Occlusion] %(message)s",
                                datefmt="%H:%M:%S")
        elif not log.handlers:
            log.addHandler(logging.NullHandler())
            log.propagate = False

        log.info("Observing %r every %.2fs", self.target_id, self.interval)
        try:
            while self._running:
                try:
                    result = await asyncio.to_thread(self.calculator.calculate, self.target_id)
                except OcclusionError as exc:
                    self.error = exc
                    log.info("Stopped observing %r: %s", self.target_id, exc)
                    break

                self.last_result = result
                if self.detector.should_emit(result.coverage):
                    log.info("%r coverage %.4f", self.target_id, result.coverage)
                    await self._emit(result)

                await self._sleep(self.interval)
        finally:
            self._running = False
            self._publish(None)

    # ───────────────────────── pull-style access
    def __aiter__(self) -> "OcclusionObserver":
        return self

    async def __anext__(self) -> OcclusionResult:
        if self._exhausted:
            raise StopAsyncIteration
        item = await self.update_queue.get()
        if item is None:
            self._exhausted = True
            raise StopAsyncIteration
        return item

    async def when_occluded(self, threshold: Optional[float] = None) -> AsyncIterator[OcclusionResult]:
        limit = self.threshold if threshold is None else threshold
        async for result in self:
            if result.is_occluded(limit):
                yield result

    async def when_visible(self, threshold: Optional[float] = None) -> AsyncIterator[OcclusionResult]:
        limit = self.threshold if threshold is None else threshold
        async for result in self:
            if result.is_visible(limit):
                yield result

    async def coverages(self) -> AsyncIterator[float]:
        async for result in self:
            yield result.coverage

    async def visibilities(self) -> AsyncIterator[float]:
        async for result in self:
            yield result.visible_percentage


def observe(calculator: "OcclusionCalculator", target_id: Hashable, **kwargs) -> OcclusionObserver:
    """Create and start an :class:`OcclusionObserver` (needs a running loop)."""
    return OcclusionObserver(calculator, target_id, **kwargs)
