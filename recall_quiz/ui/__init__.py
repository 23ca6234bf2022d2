"""Qt integration for hosts that present the quiz on a Qt event loop."""

from .qt_scheduler import QtAdvance, QtAdvanceScheduler

__all__ = [
    "QtAdvance",
    "QtAdvanceScheduler",
]
