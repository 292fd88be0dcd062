# MiniPixelAnimator/gui/pixel_grid_widget.py
from PyQt6.QtWidgets import QFrame, QPushButton, QGridLayout, QSizePolicy
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent, QColor

from animator.model import GRID_WIDTH, GRID_HEIGHT, PIXEL_COUNT, DEFAULT_PIXEL_COLOR, pixel_position

# --- Constants ---
PIXEL_BUTTON_SIZE = 24
PIXEL_GRID_SPACING = 1


class PixelButton(QPushButton):
    def __init__(self, pixel_pos: int, parent=None):
        super().__init__(parent)
        self.pixel_pos = pixel_pos
        self.setObjectName("PixelButton")
        self.setFixedSize(PIXEL_BUTTON_SIZE, PIXEL_BUTTON_SIZE)
        self.setCheckable(False)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.set_color(DEFAULT_PIXEL_COLOR)

    def set_color(self, color_hex: str):
        q_color = QColor(color_hex)
        if not q_color.isValid():
            q_color = QColor(DEFAULT_PIXEL_COLOR)
        self.setStyleSheet(
            f"background-color: {q_color.name()}; border: 1px solid #3a3a3a; border-radius: 0px;")

    def mousePressEvent(self, event: QMouseEvent):
        # The grid frame handles clicks and drags
        event.ignore()


class PixelGridFrame(QFrame):
    """16x16 editable grid. Left click or left drag requests paint on each cell touched."""
    pixel_clicked = pyqtSignal(int)  # pixel_pos

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("PixelGridFrame")
        self._pixel_buttons: list[PixelButton] = []
        self._is_left_dragging = False
        self._last_actioned_pixel: int | None = None
        self._init_ui()

    def _init_ui(self):
        self.pixel_grid_layout = QGridLayout()
        self.pixel_grid_layout.setSpacing(PIXEL_GRID_SPACING)
        self.pixel_grid_layout.setContentsMargins(0, 0, 0, 0)
        for y in range(GRID_HEIGHT):
            for x in range(GRID_WIDTH):
                button = PixelButton(pixel_position(x, y), parent=self)
                self._pixel_buttons.append(button)
                self.pixel_grid_layout.addWidget(button, y, x)
        self.setLayout(self.pixel_grid_layout)
        grid_width = GRID_WIDTH * PIXEL_BUTTON_SIZE + (GRID_WIDTH - 1) * PIXEL_GRID_SPACING
        grid_height = GRID_HEIGHT * PIXEL_BUTTON_SIZE + (GRID_HEIGHT - 1) * PIXEL_GRID_SPACING
        self.setFixedSize(grid_width, grid_height)

    def _get_pixel_at_event_pos(self, event: QMouseEvent) -> PixelButton | None:
        child = self.childAt(event.position().toPoint())
        if isinstance(child, PixelButton):
            return child
        return None

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        self._is_left_dragging = True
        button = self._get_pixel_at_event_pos(event)
        if button:
            self.pixel_clicked.emit(button.pixel_pos)
            self._last_actioned_pixel = button.pixel_pos
        else:
            self._last_actioned_pixel = None
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if not self._is_left_dragging:
            super().mouseMoveEvent(event)
            return
        button = self._get_pixel_at_event_pos(event)
        if button and button.pixel_pos != self._last_actioned_pixel:
            self.pixel_clicked.emit(button.pixel_pos)
            self._last_actioned_pixel = button.pixel_pos
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._is_left_dragging = False
            self._last_actioned_pixel = None
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def set_pixel_color(self, pixel_pos: int, color_hex: str):
        if 0 <= pixel_pos < len(self._pixel_buttons):
            self._pixel_buttons[pixel_pos].set_color(color_hex)

    def load_colors(self, colors_hex: list):
        for pixel_pos, color_hex in enumerate(colors_hex[:PIXEL_COUNT]):
            self._pixel_buttons[pixel_pos].set_color(color_hex)
