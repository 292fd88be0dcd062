import pytest

from animator.model import SequenceModel
from animator.playback import PlaybackEngine
from animator.session import EditSession


class FakeTimerHandle:
    def __init__(self, due, interval, callback, repeating, seq):
        self.due = due
        self.interval = interval
        self.callback = callback
        self.repeating = repeating
        self.seq = seq
        self.active = True

    def cancel(self):
        self.active = False

    def is_active(self):
        return self.active


class FakeScheduler:
    """Virtual clock: timers only fire inside advance()."""

    def __init__(self):
        self.now = 0.0
        self._timers = []
        self._seq = 0

    def _add(self, delay_ms, callback, repeating):
        self._seq += 1
        handle = FakeTimerHandle(self.now + delay_ms, delay_ms, callback, repeating, self._seq)
        self._timers.append(handle)
        return handle

    def schedule_after(self, delay_ms, callback):
        return self._add(delay_ms, callback, repeating=False)

    def schedule_repeating(self, interval_ms, callback):
        return self._add(interval_ms, callback, repeating=True)

    def active_timers(self):
        return [t for t in self._timers if t.active]

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [t for t in self._timers if t.active and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = timer.due
            if timer.repeating:
                timer.due += timer.interval
            else:
                timer.active = False
            timer.callback()
        self.now = target
        self._timers = [t for t in self._timers if t.active]


class SignalRecorder:
    def __init__(self, signal):
        self.calls = []
        signal.connect(self._record)

    def _record(self, *args):
        self.calls.append(args)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def model():
    sequence_model = SequenceModel()
    sequence_model.initialize()
    return sequence_model


@pytest.fixture
def engine(model, scheduler):
    return PlaybackEngine(model, scheduler)


@pytest.fixture
def session(scheduler):
    edit_session = EditSession(scheduler=scheduler)
    edit_session.initialize()
    return edit_session


@pytest.fixture
def record():
    return SignalRecorder
