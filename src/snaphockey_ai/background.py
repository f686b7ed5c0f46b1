"""Background tracking for Shot Rater analyses, keyed by shot type.

Lets an analysis keep running after the screen that started it goes away,
and lets any later caller see whether it is still running, pick up its
result, or cancel it. Starting a new analysis for a shot type cancels the
previous one for that type (last writer wins).

The manager is an owned object, not a global: create one per app and share
it. It binds to the first event loop that touches it from async code.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from .models.common import ShotType
from .models.shot import ShotAnalysisResult

logger = logging.getLogger(__name__)

CANCEL_NOTICE = "AIFlowCancel"
SHOT_RATER_SOURCE = "shot-rater"

Subscriber = Callable[[str, str], None]


class CancellationBus:
    """In-process broadcast of cancel notices. Subscribers get (notice, source)."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, source: str) -> None:
        for callback in list(self._subscribers):
            try:
                callback(CANCEL_NOTICE, source)
            except Exception:
                logger.warning("Cancel subscriber failed", exc_info=True)


class BackgroundAnalysisManager:
    """Per-shot-type registry of analyzing flags, results, tasks and cancellations."""

    def __init__(self, bus: CancellationBus | None = None) -> None:
        self.bus = bus or CancellationBus()
        self._analyzing: dict[ShotType, bool] = {}
        self._results: dict[ShotType, ShotAnalysisResult] = {}
        self._errors: dict[ShotType, str] = {}
        self._tasks: dict[ShotType, asyncio.Task] = {}
        self._cancelled: set[ShotType] = set()
        self._loop: asyncio.AbstractEventLoop | None = None

    def _check_loop(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        if self._loop is None:
            self._loop = loop
        elif loop is not self._loop:
            raise RuntimeError("BackgroundAnalysisManager used from a different event loop")

    # ── state accessors ─────────────────────────────────────────────────────

    def set_analyzing(self, shot_type: ShotType, analyzing: bool) -> None:
        self._check_loop()
        self._analyzing[shot_type] = analyzing

    def is_analyzing(self, shot_type: ShotType) -> bool:
        return self._analyzing.get(shot_type, False)

    def set_latest_result(self, shot_type: ShotType, result: ShotAnalysisResult) -> None:
        self._check_loop()
        self._results[shot_type] = result

    def latest_result(self, shot_type: ShotType) -> ShotAnalysisResult | None:
        return self._results.get(shot_type)

    def clear_result(self, shot_type: ShotType) -> None:
        self._check_loop()
        self._results.pop(shot_type, None)

    def last_error(self, shot_type: ShotType) -> str | None:
        return self._errors.get(shot_type)

    # ── task lifecycle ──────────────────────────────────────────────────────

    def set_analysis_task(self, shot_type: ShotType, task: asyncio.Task) -> None:
        """Track *task* for *shot_type*, cancelling whatever it replaces.

        Registering a task also clears any pending cancellation flag.
        """
        self._check_loop()
        previous = self._tasks.get(shot_type)
        if previous is not None and previous is not task and not previous.done():
            logger.info("Replacing in-flight %s analysis", shot_type.value)
            previous.cancel()
        self._tasks[shot_type] = task
        self._cancelled.discard(shot_type)
        self._errors.pop(shot_type, None)

    def start_analysis(
        self,
        shot_type: ShotType,
        coro: Coroutine[Any, Any, ShotAnalysisResult],
    ) -> asyncio.Task:
        """Run *coro* in the background and record its outcome for *shot_type*."""
        self._check_loop()
        task = asyncio.get_running_loop().create_task(self._run(shot_type, coro))
        task.add_done_callback(self._log_failure)
        # A task cancelled before its first step never awaits coro.
        task.add_done_callback(lambda _task: coro.close())
        self.set_analysis_task(shot_type, task)
        self.set_analyzing(shot_type, True)
        return task

    def _owns(self, shot_type: ShotType, task: asyncio.Task | None) -> bool:
        return task is not None and self._tasks.get(shot_type) is task

    async def _run(
        self,
        shot_type: ShotType,
        coro: Coroutine[Any, Any, ShotAnalysisResult],
    ) -> ShotAnalysisResult:
        me = asyncio.current_task()
        try:
            result = await coro
        except Exception as exc:
            if self._owns(shot_type, me):
                self._errors[shot_type] = str(exc)
                self._analyzing[shot_type] = False
                del self._tasks[shot_type]
            raise
        # A replaced or cancelled task must not touch its successor's state.
        if self._owns(shot_type, me):
            self._results[shot_type] = result
            self._analyzing[shot_type] = False
            del self._tasks[shot_type]
        return result

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Background analysis failed: %s", task.exception())

    def cancel_analysis(self, shot_type: ShotType, *, broadcast: bool = True) -> None:
        """Cancel the tracked task for *shot_type* and reset its state."""
        self._check_loop()
        task = self._tasks.pop(shot_type, None)
        if task is not None and not task.done():
            task.cancel()
        self._cancelled.add(shot_type)
        self._analyzing[shot_type] = False
        self._results.pop(shot_type, None)
        if broadcast:
            self.bus.publish(SHOT_RATER_SOURCE)

    def is_cancelled(self, shot_type: ShotType) -> bool:
        return shot_type in self._cancelled

    def consume_cancellation_flag(self, shot_type: ShotType) -> bool:
        """Return True at most once per cancellation."""
        self._check_loop()
        if shot_type in self._cancelled:
            self._cancelled.discard(shot_type)
            return True
        return False

    def has_task(self, shot_type: ShotType) -> bool:
        return shot_type in self._tasks
