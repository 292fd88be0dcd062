# MiniPixelAnimator/animator/timing.py
"""
Timer capability used by playback.

A scheduler exposes `schedule_after(delay_ms, callback)` and
`schedule_repeating(interval_ms, callback)`, both returning a handle with
`cancel()` and `is_active()`. QtScheduler backs this with QTimer; any other
object with the same methods can be passed to PlaybackEngine.
"""
from PyQt6.QtCore import QObject, QTimer, Qt

MIN_TIMER_INTERVAL_MS = 1


def to_timer_interval(delay_ms: float) -> int:
    """QTimer only takes whole milliseconds."""
    return max(MIN_TIMER_INTERVAL_MS, int(round(delay_ms)))


class TimerHandle:
    def __init__(self, timer: QTimer):
        self._timer = timer
        self._cancelled = False

    def cancel(self):
        if self._cancelled:
            return
        self._cancelled = True
        self._timer.stop()
        self._timer.deleteLater()

    def is_active(self) -> bool:
        return not self._cancelled and self._timer.isActive()


class QtScheduler(QObject):
    def __init__(self, parent=None):
        super().__init__(parent)

    def _make_timer(self, delay_ms: float, callback, single_shot: bool) -> TimerHandle:
        timer = QTimer(self)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.setSingleShot(single_shot)
        timer.setInterval(to_timer_interval(delay_ms))
        timer.timeout.connect(callback)
        timer.start()
        return TimerHandle(timer)

    def schedule_after(self, delay_ms: float, callback) -> TimerHandle:
        return self._make_timer(delay_ms, callback, single_shot=True)

    def schedule_repeating(self, interval_ms: float, callback) -> TimerHandle:
        return self._make_timer(interval_ms, callback, single_shot=False)
