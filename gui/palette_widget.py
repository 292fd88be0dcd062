# MiniPixelAnimator/gui/palette_widget.py
from PyQt6.QtWidgets import QGroupBox, QGridLayout, QPushButton, QVBoxLayout, QColorDialog
from PyQt6.QtGui import QColor
from PyQt6.QtCore import pyqtSignal

SWATCH_SIZE = 28
SWATCHES_PER_ROW = 5


class ColorSwatchButton(QPushButton):
    def __init__(self, hex_color: str, parent=None):
        super().__init__(parent)
        self.setObjectName("ColorSwatchButton")
        self.setFixedSize(SWATCH_SIZE, SWATCH_SIZE)
        self.hex_color = QColor(hex_color).name()
        self.setToolTip(f"{self.hex_color.upper()}. Click to select.")
        self.set_selected(False)

    def set_selected(self, selected: bool):
        border = "2px solid #60a0ff" if selected else "1px solid #555"
        self.setStyleSheet(f"background-color: {self.hex_color}; border: {border};")


class PaletteWidget(QGroupBox):
    color_clicked = pyqtSignal(str)
    custom_color_chosen = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__("Palette", parent)
        self._swatch_buttons: list[ColorSwatchButton] = []
        self._selected_color: str | None = None
        layout = QVBoxLayout(self)
        self.swatch_grid_layout = QGridLayout()
        self.swatch_grid_layout.setSpacing(4)
        layout.addLayout(self.swatch_grid_layout)
        self.custom_color_button = QPushButton("+ Custom Color")
        self.custom_color_button.setToolTip("Pick a color and add it to the palette")
        self.custom_color_button.clicked.connect(self._on_custom_color_clicked)
        layout.addWidget(self.custom_color_button)

    def _on_custom_color_clicked(self):
        initial = QColor(self._selected_color) if self._selected_color else QColor("#000000")
        color = QColorDialog.getColor(initial, self, "Custom Color")
        if color.isValid():
            self.custom_color_chosen.emit(color.name())

    def set_colors(self, colors_hex: list[str]):
        for button in self._swatch_buttons:
            self.swatch_grid_layout.removeWidget(button)
            button.deleteLater()
        self._swatch_buttons = []
        for i, hex_color in enumerate(colors_hex):
            button = ColorSwatchButton(hex_color, self)
            button.clicked.connect(lambda checked=False, c=button.hex_color: self.color_clicked.emit(c))
            self.swatch_grid_layout.addWidget(button, i // SWATCHES_PER_ROW, i % SWATCHES_PER_ROW)
            self._swatch_buttons.append(button)
        self.set_selected_color(self._selected_color)

    def set_selected_color(self, hex_color: str | None):
        self._selected_color = hex_color
        for button in self._swatch_buttons:
            button.set_selected(button.hex_color == hex_color)
