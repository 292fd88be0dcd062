# MiniPixelAnimator/gui/animator_manager_widget.py
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QInputDialog, QMessageBox
from PyQt6.QtCore import pyqtSignal

from animator.errors import AnimatorError
from animator.session import EditSession, MSG_LAST_FRAME
from animator.controls_widget import SequenceControlsWidget
from animator.timeline_widget import SequenceTimelineWidget
from animator.playback import resolve_frame_duration
from .pixel_grid_widget import PixelGridFrame
from .palette_widget import PaletteWidget


class AnimatorManagerWidget(QWidget):
    """Wires an EditSession to the grid, palette, frame strip and playback controls."""
    playback_status_update = pyqtSignal(str, int)  # message, duration_ms (0 for persistent)

    def __init__(self, configured_frame_duration=None, scheduler=None, parent=None):
        super().__init__(parent)
        initial_duration_ms = resolve_frame_duration(configured_frame_duration)
        self.sequence_controls_widget = SequenceControlsWidget(initial_duration_ms)
        self.session = EditSession(
            scheduler=scheduler,
            frame_duration_source=self.sequence_controls_widget.get_frame_duration_ms,
            parent=self)
        self.pixel_grid = PixelGridFrame()
        self.palette_widget = PaletteWidget()
        self.sequence_timeline_widget = SequenceTimelineWidget()
        self._init_ui()
        self._connect_signals()
        self.session.initialize()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        editor_layout = QHBoxLayout()
        editor_layout.addWidget(self.pixel_grid)
        editor_layout.addWidget(self.palette_widget)
        main_layout.addLayout(editor_layout)
        main_layout.addWidget(self.sequence_controls_widget)
        main_layout.addWidget(self.sequence_timeline_widget)

    def _connect_signals(self):
        model = self.session.model
        # View -> session
        self.pixel_grid.pixel_clicked.connect(self._on_pixel_clicked)
        self.palette_widget.color_clicked.connect(self.session.select_color)
        self.palette_widget.custom_color_chosen.connect(self.session.add_custom_color)
        self.sequence_timeline_widget.frame_selected.connect(self._on_timeline_frame_selected)
        self.sequence_controls_widget.add_frame_requested.connect(self.action_add_frame)
        self.sequence_controls_widget.delete_frame_requested.connect(self.action_delete_frame)
        self.sequence_controls_widget.play_requested.connect(self.action_play)
        self.sequence_controls_widget.stop_requested.connect(self.session.stop_playback)
        # Session -> view
        self.session.grid_reload_requested.connect(self._on_grid_reload_requested)
        self.session.pixel_painted.connect(self.pixel_grid.set_pixel_color)
        self.session.selected_color_changed.connect(self.palette_widget.set_selected_color)
        self.session.status_message.connect(self.playback_status_update)
        self.session.palette.swatches_changed.connect(self._on_swatches_changed)
        self.session.playback.pixel_revealed.connect(self.pixel_grid.set_pixel_color)
        self.session.playback.playback_state_changed.connect(self._on_playback_state_changed)
        model.frames_changed.connect(self._update_timeline)
        model.frame_content_updated.connect(self._on_frame_content_updated)
        model.current_edit_frame_changed.connect(self.sequence_timeline_widget.highlight_frame)

    def _on_pixel_clicked(self, pixel_pos: int):
        try:
            self.session.paint_at(pixel_pos)
        except AnimatorError as e:
            print(f"AMW WARNING: Paint rejected: {e}")

    def _on_timeline_frame_selected(self, frame_index: int):
        try:
            self.session.set_visible_frame(frame_index)
        except AnimatorError as e:
            self.playback_status_update.emit(str(e), 2000)

    def _on_grid_reload_requested(self, frame_index: int, colors: list):
        self.pixel_grid.load_colors(colors)
        self.sequence_timeline_widget.highlight_frame(frame_index)

    def _on_swatches_changed(self):
        self.palette_widget.set_colors(self.session.palette.colors())

    def _update_timeline(self):
        model = self.session.model
        indices = model.thumbnail_indices()
        colors = [model.get_frame_colors(i) for i in indices]
        self.sequence_timeline_widget.update_frames_display(
            indices, colors, model.get_current_edit_frame_index())

    def _on_frame_content_updated(self, frame_index: int):
        self.sequence_timeline_widget.update_single_frame_thumbnail(
            frame_index, self.session.model.get_frame_colors(frame_index))

    def _on_playback_state_changed(self, is_playing: bool):
        self.sequence_controls_widget.update_playback_button_state(is_playing)

    def action_add_frame(self):
        new_index = self.session.add_frame()
        self.playback_status_update.emit(f"Frame {self.session.thumbnail_indices().index(new_index) + 1} added.", 1500)

    def action_delete_frame(self):
        if self.session.model.get_real_frame_count() <= 1:
            QMessageBox.warning(self, "Delete Frame", MSG_LAST_FRAME)
            return
        text, ok = QInputDialog.getText(self, "Delete Frame", self.session.delete_prompt_text())
        if not ok:
            return
        if not self.session.delete_frame_by_number(text):
            QMessageBox.warning(self, "Delete Frame", self.session.last_status_message)

    def action_play(self):
        if not self.session.start_playback() and not self.session.is_playing():
            self.playback_status_update.emit("Cannot play: animation sequence is empty.", 2000)

    def stop_current_animation_playback(self):
        self.session.stop_playback()
