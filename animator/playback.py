# MiniPixelAnimator/animator/playback.py
import math
import re
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from .errors import InvalidDurationConfigError
from .model import PIXEL_COUNT
from .timing import to_timer_interval

DEFAULT_FRAME_DURATION_MS = 500
MIN_FRAME_DURATION_MS = 100

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def parse_frame_duration(raw_value) -> int:
    """
    Reads a frame duration the way the duration field is read: integers, or
    strings with a leading integer ('250', '250ms'). Floats are truncated.
    Raises InvalidDurationConfigError for anything missing, non-numeric or
    below MIN_FRAME_DURATION_MS.
    """
    if raw_value is None:
        raise InvalidDurationConfigError(raw_value, "no value configured")
    if isinstance(raw_value, bool):
        raise InvalidDurationConfigError(raw_value, "not a number")
    if isinstance(raw_value, int):
        value = raw_value
    elif isinstance(raw_value, float):
        if not math.isfinite(raw_value):
            raise InvalidDurationConfigError(raw_value, "not a finite number")
        value = int(raw_value)
    elif isinstance(raw_value, str):
        match = _LEADING_INT_PATTERN.match(raw_value)
        if not match:
            raise InvalidDurationConfigError(raw_value, "not a number")
        value = int(match.group(1))
    else:
        raise InvalidDurationConfigError(raw_value, "unsupported type")
    if value < MIN_FRAME_DURATION_MS:
        raise InvalidDurationConfigError(raw_value, f"below the {MIN_FRAME_DURATION_MS}ms minimum")
    return value


def resolve_frame_duration(raw_value) -> int:
    try:
        return parse_frame_duration(raw_value)
    except InvalidDurationConfigError as e:
        if raw_value is not None:
            print(f"PLAYBACK WARNING: {e}. Using default of {DEFAULT_FRAME_DURATION_MS}ms.")
        return DEFAULT_FRAME_DURATION_MS


class PlaybackState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class PlaybackEngine(QObject):
    """
    Two-level playback loop over the animation sequence.

    While playing, a repeating reveal tick paints the pixels of the current
    entry at an average of one per `frame_duration_ms / 256`. Ticks run on
    whole milliseconds, so one tick may reveal several pixels (or none) and
    a full reveal still takes about `frame_duration_ms`. After the 256th pixel the cursor
    moves to the next entry (wrapping), ticking pauses for a hold of
    `frame_duration_ms`, then ticking resumes. Only one timer is ever armed;
    it is cancelled before another one is scheduled.
    """
    playback_state_changed = pyqtSignal(bool)  # is_playing
    pixel_revealed = pyqtSignal(int, str)  # pixel_pos, color_hex
    sequence_position_changed = pyqtSignal(int)  # new sequence position

    def __init__(self, sequence_model, scheduler, parent=None):
        super().__init__(parent)
        self._model = sequence_model
        self._scheduler = scheduler
        self._state = PlaybackState.STOPPED
        self._sequence_position = 0
        self._pixel_position = 0
        self._frame_duration_ms = DEFAULT_FRAME_DURATION_MS
        self._reveal_tick = 0
        self._armed_timer = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def sequence_position(self) -> int:
        return self._sequence_position

    @property
    def pixel_position(self) -> int:
        return self._pixel_position

    @property
    def frame_duration_ms(self) -> int:
        return self._frame_duration_ms

    @property
    def pixel_interval_ms(self) -> float:
        return self._frame_duration_ms / PIXEL_COUNT

    @property
    def tick_interval_ms(self) -> int:
        """Timers run on whole milliseconds; short durations reveal several pixels per tick."""
        return to_timer_interval(self.pixel_interval_ms)

    @property
    def reveal_tick_count(self) -> int:
        return max(1, round(self._frame_duration_ms / self.tick_interval_ms))

    def has_armed_timer(self) -> bool:
        return self._armed_timer is not None and self._armed_timer.is_active()

    def _disarm(self):
        if self._armed_timer is not None:
            self._armed_timer.cancel()
            self._armed_timer = None

    def _arm_reveal_ticks(self):
        self._disarm()
        self._armed_timer = self._scheduler.schedule_repeating(
            self.tick_interval_ms, self._on_reveal_tick)

    def _arm_hold(self):
        self._disarm()
        self._armed_timer = self._scheduler.schedule_after(
            self._frame_duration_ms, self._on_hold_elapsed)

    def start(self, frame_duration_ms=None) -> bool:
        """Enters PLAYING from the first sequence entry. Returns False if nothing was started."""
        if self._state is PlaybackState.PLAYING:
            return False
        if self._model.get_playback_length() == 0:
            print("PLAYBACK WARNING: Animation sequence is empty, not starting playback.")
            return False
        self._frame_duration_ms = resolve_frame_duration(frame_duration_ms)
        self._sequence_position = 0
        self._pixel_position = 0
        self._reveal_tick = 0
        self._state = PlaybackState.PLAYING
        self._arm_reveal_ticks()
        print(f"PLAYBACK INFO: Started, {self._frame_duration_ms}ms per frame.")
        self.playback_state_changed.emit(True)
        return True

    def stop(self):
        self._disarm()
        if self._state is PlaybackState.PLAYING:
            self._state = PlaybackState.STOPPED
            print("PLAYBACK INFO: Stopped.")
            self.playback_state_changed.emit(False)

    def _on_reveal_tick(self):
        if self._state is not PlaybackState.PLAYING:
            self._disarm()
            return
        length = self._model.get_playback_length()
        if length == 0:
            self.stop()
            return
        if self._sequence_position >= length:
            self._sequence_position = 0
        frame = self._model.get_playback_frame(self._sequence_position)
        self._reveal_tick += 1
        # Spread the 256 pixels evenly over the ticks of one frame
        target = min(PIXEL_COUNT, -(-self._reveal_tick * PIXEL_COUNT // self.reveal_tick_count))
        while self._pixel_position < target:
            self.pixel_revealed.emit(self._pixel_position, frame.colors[self._pixel_position])
            if self._state is not PlaybackState.PLAYING:
                return  # Stopped by a pixel_revealed listener
            self._pixel_position += 1
        if self._pixel_position >= PIXEL_COUNT:
            self._pixel_position = 0
            self._reveal_tick = 0
            self._sequence_position = (self._sequence_position + 1) % length
            self.sequence_position_changed.emit(self._sequence_position)
            if self._state is PlaybackState.PLAYING:
                self._arm_hold()

    def _on_hold_elapsed(self):
        if self._state is PlaybackState.PLAYING:
            self._arm_reveal_ticks()
        else:
            self._disarm()
