# MiniPixelAnimator/animator/controls_widget.py
from PyQt6.QtWidgets import (QWidget, QHBoxLayout, QPushButton, QLabel, QSpinBox,
                             QSpacerItem, QSizePolicy)
from PyQt6.QtCore import pyqtSignal

from animator.playback import DEFAULT_FRAME_DURATION_MS

# --- Icons (Unicode Emojis) ---
ICON_ADD_FRAME = "✚"
ICON_DELETE = "🗑"
ICON_PLAY = "▶"
ICON_STOP = "■"

DURATION_SPINBOX_MIN = 1  # Values under the playback floor are accepted and fall back to the default
DURATION_SPINBOX_MAX = 10000


class SequenceControlsWidget(QWidget):
    add_frame_requested = pyqtSignal()
    delete_frame_requested = pyqtSignal()
    play_requested = pyqtSignal()
    stop_requested = pyqtSignal()

    def __init__(self, initial_duration_ms: int = DEFAULT_FRAME_DURATION_MS, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(6)
        self.add_frame_button = QPushButton(f"{ICON_ADD_FRAME} Add Frame")
        self.add_frame_button.clicked.connect(self.add_frame_requested)
        layout.addWidget(self.add_frame_button)
        self.delete_frame_button = QPushButton(f"{ICON_DELETE} Delete Frame")
        self.delete_frame_button.clicked.connect(self.delete_frame_requested)
        layout.addWidget(self.delete_frame_button)
        layout.addSpacerItem(QSpacerItem(
            20, 10, QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum))
        self.play_button = QPushButton(f"{ICON_PLAY} Play")
        self.play_button.setObjectName("AnimatorPlayButton")
        self.play_button.clicked.connect(self.play_requested)
        layout.addWidget(self.play_button)
        self.stop_button = QPushButton(f"{ICON_STOP} Stop")
        self.stop_button.clicked.connect(self.stop_requested)
        layout.addWidget(self.stop_button)
        layout.addWidget(QLabel("Frame duration:"))
        self.duration_spinbox = QSpinBox()
        self.duration_spinbox.setRange(DURATION_SPINBOX_MIN, DURATION_SPINBOX_MAX)
        self.duration_spinbox.setSuffix(" ms")
        self.duration_spinbox.setValue(initial_duration_ms)
        layout.addWidget(self.duration_spinbox)
        self.update_playback_button_state(False)

    def update_playback_button_state(self, is_playing: bool):
        self.play_button.setEnabled(not is_playing)
        self.stop_button.setEnabled(is_playing)
        self.play_button.setProperty("active", is_playing)
        self.style().unpolish(self.play_button)
        self.style().polish(self.play_button)

    def get_frame_duration_ms(self) -> int:
        return self.duration_spinbox.value()
