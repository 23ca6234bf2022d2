"""Cancelable one-shot timers used to auto-advance after an answer."""

from __future__ import annotations

from collections.abc import Callable
import logging
from threading import Lock, Timer
from typing import Protocol

logger = logging.getLogger(__name__)


class ScheduledAdvance(Protocol):
    """Handle to a pending auto-advance."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class AdvanceScheduler(Protocol):
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledAdvance: ...


class ThreadedAdvance:
    """Pending callback on a ``threading.Timer``.

    Cancelling before the timer thread checks the flag keeps the callback from
    running. A callback that already started is not interrupted, so callers that
    need a hard guarantee tag each callback and ignore stale ones.
    """

    def __init__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._lock = Lock()
        self._cancelled = False
        self._fired = False
        self._timer = Timer(max(delay_ms, 0) / 1000.0, self._fire)
        self._timer.name = "QuizAutoAdvance"
        self._timer.daemon = True

    def start(self) -> None:
        self._timer.start()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
        self._timer.cancel()

    def _fire(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._fired = True
        try:
            self._callback()
        except Exception:
            logger.exception("Auto-advance callback failed")


class ThreadedAdvanceScheduler:
    """Schedules auto-advance callbacks on background timer threads."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ThreadedAdvance:
        pending = ThreadedAdvance(delay_ms, callback)
        pending.start()
        return pending
