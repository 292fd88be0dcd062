# MiniPixelAnimator/animator/timeline_widget.py
from PyQt6.QtWidgets import (QWidget, QVBoxLayout, QListWidget, QListWidgetItem,
                             QAbstractItemView, QStyledItemDelegate, QStyleOptionViewItem, QStyle)
from PyQt6.QtCore import Qt, pyqtSignal, QSize, QRect, QModelIndex
from PyQt6.QtGui import QPainter, QColor, QBrush, QPen

from animator.model import GRID_WIDTH, PIXEL_COUNT, pixel_coords

THUMBNAIL_PIXEL_SIZE = 4  # 16 pixels * 4 = 64px preview
THUMBNAIL_GRID_SIZE = GRID_WIDTH * THUMBNAIL_PIXEL_SIZE
ITEM_PADDING = 5
TEXT_AREA_HEIGHT = 16
THUMBNAIL_ITEM_WIDTH = THUMBNAIL_GRID_SIZE + 2 * ITEM_PADDING
THUMBNAIL_ITEM_HEIGHT = TEXT_AREA_HEIGHT + THUMBNAIL_GRID_SIZE + 2 * ITEM_PADDING

FRAME_INDEX_ROLE = Qt.ItemDataRole.UserRole


class FrameThumbnailDelegate(QStyledItemDelegate):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.frame_data_list: list[list[str]] = []  # One color list per row
        self.highlighted_row = -1

    def paint(self, painter: QPainter, option: QStyleOptionViewItem, index: QModelIndex):
        painter.save()
        rect = option.rect
        is_highlighted = index.row() == self.highlighted_row
        is_hovered = bool(option.state & QStyle.StateFlag.State_MouseOver)
        bg_color = QColor("#2f4f6f") if is_highlighted else QColor("#282828")
        if is_hovered and not is_highlighted:
            bg_color = bg_color.lighter(130)
        painter.fillRect(rect, bg_color)
        painter.setPen(QColor("#E0E0E0"))
        text_rect = QRect(rect.x(), rect.y() + 2, rect.width(), TEXT_AREA_HEIGHT)
        painter.drawText(text_rect, Qt.AlignmentFlag.AlignCenter, f"Frame {index.row() + 1}")

        frame_colors = None
        if 0 <= index.row() < len(self.frame_data_list):
            frame_colors = self.frame_data_list[index.row()]
        grid_x = rect.x() + (rect.width() - THUMBNAIL_GRID_SIZE) // 2
        grid_y = text_rect.bottom() + ITEM_PADDING
        if frame_colors and len(frame_colors) == PIXEL_COUNT:
            for pixel_pos, color_str in enumerate(frame_colors):
                x, y = pixel_coords(pixel_pos)
                q_color = QColor(color_str)
                if not q_color.isValid():
                    q_color = QColor("#ffffff")
                painter.fillRect(grid_x + x * THUMBNAIL_PIXEL_SIZE, grid_y + y * THUMBNAIL_PIXEL_SIZE,
                                 THUMBNAIL_PIXEL_SIZE, THUMBNAIL_PIXEL_SIZE, QBrush(q_color))
        if is_highlighted:
            painter.setPen(QPen(QColor("#60a0ff"), 2))
            painter.drawRect(rect.adjusted(1, 1, -1, -1))
        painter.restore()

    def sizeHint(self, option: QStyleOptionViewItem, index: QModelIndex) -> QSize:
        return QSize(THUMBNAIL_ITEM_WIDTH, THUMBNAIL_ITEM_HEIGHT)


class SequenceTimelineWidget(QWidget):
    """Thumbnails of the frames in playback order, hidden placeholder excluded."""
    frame_selected = pyqtSignal(int)  # storage index of the clicked frame

    def __init__(self, parent=None):
        super().__init__(parent)
        self._frame_indices: list[int] = []
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.frame_list_widget = QListWidget()
        self.frame_list_widget.setViewMode(QListWidget.ViewMode.IconMode)
        self.frame_list_widget.setFlow(QListWidget.Flow.LeftToRight)
        self.frame_list_widget.setWrapping(True)
        self.frame_list_widget.setResizeMode(QListWidget.ResizeMode.Adjust)
        self.frame_list_widget.setMovement(QListWidget.Movement.Static)
        self.frame_list_widget.setUniformItemSizes(True)
        self.frame_list_widget.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.frame_list_widget.setMouseTracking(True)
        self.thumbnail_delegate = FrameThumbnailDelegate(self.frame_list_widget)
        self.frame_list_widget.setItemDelegate(self.thumbnail_delegate)
        self.frame_list_widget.setStyleSheet("""
            QListWidget { border: 1px solid #444; background-color: #282828; }
        """)
        self.frame_list_widget.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self.frame_list_widget)
        self.setMinimumHeight(THUMBNAIL_ITEM_HEIGHT + 12)

    def _on_item_clicked(self, item: QListWidgetItem):
        frame_index = item.data(FRAME_INDEX_ROLE)
        if frame_index is not None:
            self.frame_selected.emit(int(frame_index))

    def update_frames_display(self, frame_indices: list[int], frames_color_data: list[list[str]],
                              highlighted_frame_index: int = -1):
        self.frame_list_widget.blockSignals(True)
        self._frame_indices = list(frame_indices)
        self.thumbnail_delegate.frame_data_list = list(frames_color_data)
        self.frame_list_widget.clear()
        for frame_index in self._frame_indices:
            item = QListWidgetItem()
            item.setData(FRAME_INDEX_ROLE, frame_index)
            self.frame_list_widget.addItem(item)
        self.frame_list_widget.blockSignals(False)
        self.highlight_frame(highlighted_frame_index)

    def highlight_frame(self, frame_index: int):
        row = self._frame_indices.index(frame_index) if frame_index in self._frame_indices else -1
        self.thumbnail_delegate.highlighted_row = row
        if row >= 0:
            self.frame_list_widget.scrollToItem(
                self.frame_list_widget.item(row), QAbstractItemView.ScrollHint.EnsureVisible)
        self.frame_list_widget.viewport().update()

    def update_single_frame_thumbnail(self, frame_index: int, new_frame_colors: list[str]):
        if frame_index not in self._frame_indices:
            return  # Hidden placeholder or stale index, no thumbnail
        row = self._frame_indices.index(frame_index)
        self.thumbnail_delegate.frame_data_list[row] = new_frame_colors
        model_idx = self.frame_list_widget.model().index(row, 0)
        if model_idx.isValid():
            self.frame_list_widget.update(model_idx)
