# MiniPixelAnimator/animator/palette.py
from PyQt6.QtCore import QObject, pyqtSignal

from .colors import colors_equal, is_valid_color, normalize_color

DEFAULT_COLORS = [
    "#000000", "#ffffff", "#e9760a", "#ff0000", "#00ff00",
    "#0000ff", "#ffff00", "#00ffff", "#ff00ff", "#888888",
]


class Palette(QObject):
    """
    Swatches in display order: the default colors first, then custom colors,
    newest custom first. No two swatches share an RGB triple.
    """
    swatches_changed = pyqtSignal()
    color_selected = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._colors: list[str] = []
        self._default_count = 0
        self.selected_color: str | None = None

    def colors(self) -> list[str]:
        return list(self._colors)

    def default_colors(self) -> list[str]:
        return self._colors[:self._default_count]

    def custom_colors(self) -> list[str]:
        return self._colors[self._default_count:]

    def contains(self, color) -> bool:
        if not is_valid_color(color):
            return False
        return any(colors_equal(existing, color) for existing in self._colors)

    def add_default_colors(self, colors=None):
        """Appends the fixed default prefix; meant for session start, before any custom color."""
        if colors is None:
            colors = DEFAULT_COLORS
        added = False
        for color in colors:
            normalized = normalize_color(color)
            if normalized is None:
                print(f"PALETTE WARNING: Skipping invalid default color {color!r}")
                continue
            if self.contains(normalized):
                continue
            # Defaults stay in front of any custom colors
            self._colors.insert(self._default_count, normalized)
            self._default_count += 1
            added = True
        if added:
            self.swatches_changed.emit()

    def add_custom_color(self, color) -> str | None:
        """
        Inserts a color right after the defaults and selects it.
        Returns the normalized color, or None when it was invalid or already present.
        """
        normalized = normalize_color(color)
        if normalized is None:
            print(f"PALETTE WARNING: Ignoring invalid custom color {color!r}")
            return None
        if self.contains(normalized):
            return None
        self._colors.insert(self._default_count, normalized)
        self.swatches_changed.emit()
        self.select(normalized)
        return normalized

    def select(self, color) -> bool:
        normalized = normalize_color(color)
        if normalized is None or not self.contains(normalized):
            return False
        if self.selected_color != normalized:
            self.selected_color = normalized
            self.color_selected.emit(normalized)
        return True

    def clear(self):
        self._colors = []
        self._default_count = 0
        self.selected_color = None
        self.swatches_changed.emit()

    def __len__(self):
        return len(self._colors)
