# MiniPixelAnimator/animator/session.py
from PyQt6.QtCore import QObject, pyqtSignal

from .colors import BLACK_HEX, is_valid_color, normalize_color
from .errors import InvalidIndexError, LastFrameError
from .model import SequenceModel
from .palette import DEFAULT_COLORS, Palette
from .playback import PlaybackEngine
from .timing import QtScheduler

MSG_LAST_FRAME = "Cannot delete the only remaining frame!"
MSG_INVALID_FRAME_NUMBER = "Invalid frame number"


class EditSession(QObject):
    """
    The editor's operations for its host UI: painting the visible frame,
    palette selection, adding and deleting frames, navigation and playback.
    Paint requests are ignored while playback runs; adding or deleting a
    frame stops playback first.
    """
    grid_reload_requested = pyqtSignal(int, list)  # frame_index, full list of colors
    pixel_painted = pyqtSignal(int, str)  # pixel_pos, color_hex
    selected_color_changed = pyqtSignal(str)
    status_message = pyqtSignal(str, int)  # message, duration_ms (0 for persistent)

    def __init__(self, scheduler=None, frame_duration_source=None, parent=None):
        super().__init__(parent)
        self.model = SequenceModel(self)
        self.palette = Palette(self)
        if scheduler is None:
            scheduler = QtScheduler(self)
        self.playback = PlaybackEngine(self.model, scheduler, self)
        # Callable returning the configured frame duration (any raw value)
        self._frame_duration_source = frame_duration_source
        self._selected_color = BLACK_HEX
        self.last_status_message = ""

        self.palette.color_selected.connect(self._set_selected_color)
        self.playback.playback_state_changed.connect(self._on_playback_state_changed)

    # --- Session state ---
    @property
    def visible_frame_index(self) -> int:
        return self.model.get_current_edit_frame_index()

    @property
    def selected_color(self) -> str:
        return self._selected_color

    def is_playing(self) -> bool:
        return self.playback.is_playing()

    def initialize(self):
        self.playback.stop()
        self.model.initialize()
        self.palette.clear()
        self.palette.add_default_colors(DEFAULT_COLORS)
        self.select_color(DEFAULT_COLORS[0])
        self._request_grid_reload()

    def _request_grid_reload(self):
        index = self.visible_frame_index
        self.grid_reload_requested.emit(index, self.model.get_frame_colors(index))

    def _report(self, message: str, duration_ms: int):
        self.last_status_message = message
        self.status_message.emit(message, duration_ms)

    # --- Colors ---
    def _set_selected_color(self, color_hex: str):
        if color_hex != self._selected_color:
            self._selected_color = color_hex
            self.selected_color_changed.emit(color_hex)

    def select_color(self, color) -> bool:
        if not is_valid_color(color):
            return False
        normalized = normalize_color(color)
        self.palette.select(normalized)  # Highlights the swatch if there is one
        self._set_selected_color(normalized)
        return True

    def add_custom_color(self, color) -> bool:
        return self.palette.add_custom_color(color) is not None

    # --- Painting & navigation ---
    def paint_at(self, pixel_pos: int) -> bool:
        if self.playback.is_playing():
            return False
        changed = self.model.paint_pixel(self.visible_frame_index, pixel_pos, self._selected_color)
        if changed:
            self.pixel_painted.emit(pixel_pos, self._selected_color)
        return changed

    def set_visible_frame(self, index: int):
        self.model.set_current_edit_frame_index(index)
        self._request_grid_reload()

    def thumbnail_indices(self) -> list[int]:
        return self.model.thumbnail_indices()

    # --- Frames ---
    def add_frame(self) -> int:
        self.playback.stop()
        new_index = self.model.add_frame()
        self._request_grid_reload()
        return new_index

    def delete_frame(self, index: int) -> int:
        self.model.check_deletable(index)  # Reject before touching playback
        self.playback.stop()
        new_visible_index = self.model.delete_frame(index)
        self._request_grid_reload()
        return new_visible_index

    def delete_prompt_text(self) -> str:
        return f"Enter frame number to delete (1 to {self.model.get_real_frame_count()}):"

    def delete_frame_by_number(self, frame_number) -> bool:
        """
        Deletes by the 1-based number shown to the user. `None` means the
        prompt was cancelled. Rejections are reported through status_message.
        """
        if self.model.get_real_frame_count() <= 1:
            self._report(MSG_LAST_FRAME, 3000)
            return False
        if frame_number is None:
            return False
        try:
            number = int(str(frame_number).strip())
        except ValueError:
            self._report(MSG_INVALID_FRAME_NUMBER, 3000)
            return False
        try:
            self.delete_frame(number - 1)
        except LastFrameError as e:
            self._report(str(e), 3000)
            return False
        except InvalidIndexError:
            self._report(MSG_INVALID_FRAME_NUMBER, 3000)
            return False
        self._report(f"Frame {number} deleted.", 1500)
        return True

    # --- Playback ---
    def start_playback(self, frame_duration_ms=None) -> bool:
        raw_duration = frame_duration_ms
        if raw_duration is None and self._frame_duration_source is not None:
            raw_duration = self._frame_duration_source()
        return self.playback.start(raw_duration)

    def stop_playback(self):
        self.playback.stop()

    def _on_playback_state_changed(self, is_playing: bool):
        if is_playing:
            self._report("Animation playing...", 0)
        else:
            self._report("Animation stopped.", 3000)
            self._request_grid_reload()
