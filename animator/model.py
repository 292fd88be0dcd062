# MiniPixelAnimator/animator/model.py
from PyQt6.QtCore import QObject, pyqtSignal

from .colors import WHITE_HEX, normalize_color
from .errors import InvalidIndexError, InvalidPixelPositionError, LastFrameError

GRID_WIDTH = 16
GRID_HEIGHT = 16
PIXEL_COUNT = GRID_WIDTH * GRID_HEIGHT
DEFAULT_PIXEL_COLOR = WHITE_HEX
HIDDEN_FRAME_INDEX = 1  # The blank placeholder always sits right after the first real frame

HIDDEN_FRAME_REMOVED = "removed"
HIDDEN_FRAME_INSERTED = "inserted"


def pixel_coords(pixel_pos: int) -> tuple[int, int]:
    """Row-major mapping of a pixel position to (x, y) on the 16x16 grid."""
    return pixel_pos % GRID_WIDTH, pixel_pos // GRID_WIDTH


def pixel_position(x: int, y: int) -> int:
    return y * GRID_WIDTH + x


def is_valid_pixel_position(pixel_pos) -> bool:
    return isinstance(pixel_pos, int) and not isinstance(pixel_pos, bool) \
        and 0 <= pixel_pos < PIXEL_COUNT


def remap_index_after_delete(index: int, deleted_index: int) -> int | None:
    """Where `index` ends up once `deleted_index` is removed; None if it was the deleted one."""
    if index == deleted_index:
        return None
    return index if index < deleted_index else index - 1


class PixelBuffer:
    """One frame's raster: exactly PIXEL_COUNT '#rrggbb' strings, never resized."""

    def __init__(self, colors=None):
        if colors and isinstance(colors, list) and len(colors) == PIXEL_COUNT:
            self.colors = [normalize_color(c) or DEFAULT_PIXEL_COLOR for c in colors]
        else:
            self.colors = [DEFAULT_PIXEL_COLOR] * PIXEL_COUNT

    def set_pixel_color(self, pixel_pos: int, color_hex: str):
        if not is_valid_pixel_position(pixel_pos):
            raise InvalidPixelPositionError(pixel_pos, PIXEL_COUNT)
        normalized = normalize_color(color_hex)
        if normalized is None:
            raise ValueError(f"Invalid color: {color_hex!r}")
        self.colors[pixel_pos] = normalized

    def get_pixel_color(self, pixel_pos: int) -> str:
        if not is_valid_pixel_position(pixel_pos):
            raise InvalidPixelPositionError(pixel_pos, PIXEL_COUNT)
        return self.colors[pixel_pos]

    def get_all_colors(self) -> list:
        return list(self.colors)  # Return a copy

    def is_blank(self) -> bool:
        return all(c == DEFAULT_PIXEL_COLOR for c in self.colors)

    def __len__(self):
        return len(self.colors)

    def __eq__(self, other):
        if isinstance(other, PixelBuffer):
            return self.colors == other.colors
        return False

    def __repr__(self):
        return f"PixelBuffer(blank={self.is_blank()})"


class FrameStore:
    """
    Ordered storage of every PixelBuffer, including the hidden placeholder.

    While exactly one real frame exists, a blank placeholder sits at
    HIDDEN_FRAME_INDEX so playback always has two entries to cycle over.
    `reconcile_hidden_frame()` is the one place that inserts or drops it.
    """

    def __init__(self):
        self.frames: list[PixelBuffer] = []
        self.hidden_frame_exists = False

    def initialize(self):
        self.frames = [PixelBuffer()]
        self.hidden_frame_exists = False
        self.reconcile_hidden_frame()

    def frame_count(self) -> int:
        return len(self.frames)

    def real_frame_count(self) -> int:
        return len(self.frames) - (1 if self.hidden_frame_exists else 0)

    def is_hidden_index(self, index: int) -> bool:
        return self.hidden_frame_exists and index == HIDDEN_FRAME_INDEX

    def is_valid_index(self, index) -> bool:
        return isinstance(index, int) and not isinstance(index, bool) \
            and 0 <= index < len(self.frames)

    def is_real_index(self, index) -> bool:
        return self.is_valid_index(index) and not self.is_hidden_index(index)

    def _require_real_index(self, index):
        if not self.is_valid_index(index):
            raise InvalidIndexError(index, len(self.frames))
        if self.is_hidden_index(index):
            raise InvalidIndexError(index, message=f"Frame index {index} is the hidden placeholder")

    def add_frame(self) -> int:
        """Appends a blank frame and returns its storage index (before reconciliation)."""
        self.frames.append(PixelBuffer())
        return len(self.frames) - 1

    def check_deletable(self, index: int):
        # The last-frame check comes first: with a single real frame nothing is deletable.
        if self.real_frame_count() <= 1:
            raise LastFrameError()
        self._require_real_index(index)

    def delete_frame(self, index: int):
        self.check_deletable(index)
        del self.frames[index]

    def get_frame(self, index: int) -> PixelBuffer:
        if not self.is_valid_index(index):
            raise InvalidIndexError(index, len(self.frames))
        return self.frames[index]

    def paint_pixel(self, index: int, pixel_pos: int, color_hex: str):
        self._require_real_index(index)
        self.frames[index].set_pixel_color(pixel_pos, color_hex)

    def reconcile_hidden_frame(self) -> tuple[str, int] | None:
        """
        Brings the placeholder in line with the real frame count.
        Returns (HIDDEN_FRAME_REMOVED | HIDDEN_FRAME_INSERTED, index) when the
        store changed so index holders can be remapped, otherwise None.
        """
        real_count = self.real_frame_count()
        if self.hidden_frame_exists and real_count >= 2:
            del self.frames[HIDDEN_FRAME_INDEX]
            self.hidden_frame_exists = False
            return HIDDEN_FRAME_REMOVED, HIDDEN_FRAME_INDEX
        if not self.hidden_frame_exists and real_count == 1:
            self.frames.insert(HIDDEN_FRAME_INDEX, PixelBuffer())
            self.hidden_frame_exists = True
            return HIDDEN_FRAME_INSERTED, HIDDEN_FRAME_INDEX
        return None


class AnimationSequence:
    """Playback order as a list of storage indices, kept separate from storage order."""

    def __init__(self):
        self._indices: list[int] = []

    def reset(self):
        self._indices = [0, HIDDEN_FRAME_INDEX]

    def on_frame_added(self, new_index: int):
        self._indices.append(new_index)

    def on_frame_deleted(self, deleted_index: int):
        remapped = []
        for index in self._indices:
            new_index = remap_index_after_delete(index, deleted_index)
            if new_index is not None:
                remapped.append(new_index)
        self._indices = remapped

    def on_hidden_frame_inserted(self, hidden_index: int):
        self._indices = [i + 1 if i >= hidden_index else i for i in self._indices]
        self._indices.append(hidden_index)
        self._indices.sort()

    def entries(self):
        """Yields storage indices in playback order; call again to restart."""
        for index in list(self._indices):
            yield index

    def to_list(self) -> list[int]:
        return list(self._indices)

    def __iter__(self):
        return self.entries()

    def __len__(self):
        return len(self._indices)

    def __getitem__(self, position: int) -> int:
        if not 0 <= position < len(self._indices):
            raise InvalidIndexError(position, len(self._indices),
                                    message=f"Invalid sequence position: {position}")
        return self._indices[position]

    def __contains__(self, index):
        return index in self._indices


class SequenceModel(QObject):
    frames_changed = pyqtSignal()
    frame_content_updated = pyqtSignal(int)  # Parameter is frame_index (thumbnail dirty)
    current_edit_frame_changed = pyqtSignal(int)  # Parameter is new visible frame index

    def __init__(self, parent=None):
        super().__init__(parent)
        self.frame_store = FrameStore()
        self.sequence = AnimationSequence()
        self._current_edit_frame_index = 0

    def initialize(self):
        self.frame_store.initialize()
        self.sequence.reset()
        self._current_edit_frame_index = 0
        self.frames_changed.emit()
        self.current_edit_frame_changed.emit(self._current_edit_frame_index)

    def _reconcile_hidden_frame(self):
        change = self.frame_store.reconcile_hidden_frame()
        if change is None:
            return
        kind, hidden_index = change
        if kind == HIDDEN_FRAME_REMOVED:
            self.sequence.on_frame_deleted(hidden_index)
            remapped = remap_index_after_delete(self._current_edit_frame_index, hidden_index)
            self._current_edit_frame_index = 0 if remapped is None else remapped
        else:
            self.sequence.on_hidden_frame_inserted(hidden_index)
            if self._current_edit_frame_index >= hidden_index:
                self._current_edit_frame_index += 1

    def add_frame(self) -> int:
        """Adds a blank frame at the end of storage and playback, makes it visible, returns its index."""
        new_index = self.frame_store.add_frame()
        self.sequence.on_frame_added(new_index)
        self._current_edit_frame_index = new_index
        self._reconcile_hidden_frame()
        self.frames_changed.emit()
        self.current_edit_frame_changed.emit(self._current_edit_frame_index)
        return self._current_edit_frame_index

    def delete_frame(self, index: int) -> int:
        """Deletes a real frame, remaps every held index and returns the new visible index."""
        self.frame_store.delete_frame(index)  # Raises before anything changes
        self.sequence.on_frame_deleted(index)
        remapped = remap_index_after_delete(self._current_edit_frame_index, index)
        self._current_edit_frame_index = 0 if remapped is None else remapped
        self._reconcile_hidden_frame()
        self.frames_changed.emit()
        self.current_edit_frame_changed.emit(self._current_edit_frame_index)
        return self._current_edit_frame_index

    def check_deletable(self, index: int):
        self.frame_store.check_deletable(index)

    def get_frame(self, index: int) -> PixelBuffer:
        return self.frame_store.get_frame(index)

    def get_frame_colors(self, index: int) -> list:
        return self.frame_store.get_frame(index).get_all_colors()

    def paint_pixel(self, index: int, pixel_pos: int, color_hex: str) -> bool:
        """Sets one pixel; returns False when the pixel already had that color."""
        frame = self.frame_store.get_frame(index)
        before = frame.colors[pixel_pos] if is_valid_pixel_position(pixel_pos) else None
        self.frame_store.paint_pixel(index, pixel_pos, color_hex)
        if frame.colors[pixel_pos] == before:
            return False
        self.frame_content_updated.emit(index)
        return True

    def set_current_edit_frame_index(self, index: int):
        if not self.frame_store.is_real_index(index):
            raise InvalidIndexError(index, self.frame_store.frame_count())
        if self._current_edit_frame_index != index:
            self._current_edit_frame_index = index
            self.current_edit_frame_changed.emit(index)

    def get_current_edit_frame_index(self) -> int:
        return self._current_edit_frame_index

    def get_frame_count(self) -> int:
        return self.frame_store.frame_count()

    def get_real_frame_count(self) -> int:
        return self.frame_store.real_frame_count()

    def has_hidden_frame(self) -> bool:
        return self.frame_store.hidden_frame_exists

    def is_hidden_index(self, index: int) -> bool:
        return self.frame_store.is_hidden_index(index)

    def thumbnail_indices(self) -> list[int]:
        return [i for i in self.sequence.entries() if not self.frame_store.is_hidden_index(i)]

    def playback_entries(self):
        return self.sequence.entries()

    def get_playback_length(self) -> int:
        return len(self.sequence)

    def get_playback_frame(self, sequence_position: int) -> PixelBuffer:
        return self.frame_store.get_frame(self.sequence[sequence_position])
