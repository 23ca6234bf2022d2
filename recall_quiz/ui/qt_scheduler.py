"""Auto-advance scheduling on the Qt event loop."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer


class QtAdvance:
    """Pending callback backed by a single-shot ``QTimer``.

    The timer is released with ``deleteLater`` once it fires or is cancelled.
    """

    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def released(self) -> bool:
        return self._timer is None

    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.stop()
            self._release()

    def _fire(self, callback: Callable[[], None]) -> None:
        if self._cancelled:
            return
        try:
            callback()
        finally:
            self._release()

    def _release(self) -> None:
        if self._timer is not None:
            self._timer.deleteLater()
            self._timer = None


class QtAdvanceScheduler:
    """Schedules auto-advance callbacks as single-shot timers.

    Must be used from the thread that runs the Qt event loop; callbacks fire on
    that same thread.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> QtAdvance:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setInterval(max(delay_ms, 0))
        pending = QtAdvance(timer)
        timer.timeout.connect(lambda: pending._fire(callback))
        timer.start()
        return pending
