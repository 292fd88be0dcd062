# MiniPixelAnimator/gui/main_window.py
from PyQt6.QtWidgets import QMainWindow, QStatusBar
from PyQt6.QtGui import QCloseEvent

from managers.settings_manager import read_configured_frame_duration
from .animator_manager_widget import AnimatorManagerWidget

APP_WINDOW_TITLE = "MiniPixel Animator Studio"


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(APP_WINDOW_TITLE)
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        configured_duration = read_configured_frame_duration()
        self.animator_manager = AnimatorManagerWidget(configured_frame_duration=configured_duration)
        self.animator_manager.playback_status_update.connect(self._show_status_message)
        self.setCentralWidget(self.animator_manager)
        self._show_status_message("Ready.", 2000)

    def _show_status_message(self, message: str, duration_ms: int):
        self.status_bar.showMessage(message, duration_ms)

    def closeEvent(self, event: QCloseEvent):
        self.animator_manager.stop_current_animation_playback()
        super().closeEvent(event)
