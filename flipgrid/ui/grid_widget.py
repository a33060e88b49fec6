"""Painted 3x3 board used both for play and for the level editor."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QColor, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QSizePolicy, QWidget

from flipgrid.core.grid import GRID_SIZE, TOTAL_CELLS, create_empty_grid
from flipgrid.ui.colors import GridColors, blend_hex
from flipgrid.ui.models import OverlaySettings


class GridWidget(QWidget):
    """Square board of cells; emits ``cell_clicked(index)`` when interactive."""

    cell_clicked = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None, min_side: int = 240) -> None:
        super().__init__(parent)
        self._cells: tuple[bool, ...] = create_empty_grid()
        self._interactive = False
        self._cover_text: Optional[str] = None
        self._banner_text: Optional[str] = None
        self._overlay = OverlaySettings()
        self._overlay_pixmap: Optional[QPixmap] = None
        self._overlay_path: Optional[Path] = None
        self._hover_index = -1
        self.setMouseTracking(True)
        self.setMinimumSize(min_side, min_side)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_cells(self, cells: Sequence[bool]) -> None:
        self._cells = tuple(cells)
        self.update()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive
        self.setCursor(Qt.PointingHandCursor if interactive else Qt.ForbiddenCursor)
        self.update()

    def set_cover(self, text: Optional[str]) -> None:
        """Hide the board behind an opaque cover (blind start). None removes it."""
        self._cover_text = text
        self.update()

    def set_banner(self, text: Optional[str]) -> None:
        """Translucent message drawn over the visible board."""
        self._banner_text = text
        self.update()

    def set_overlay(self, overlay: OverlaySettings) -> None:
        """Apply overlay settings; the image is read from disk only when its path changes."""
        self._overlay = overlay
        if overlay.image_path != self._overlay_path:
            self._overlay_path = overlay.image_path
            self._overlay_pixmap = None
            if overlay.image_path is not None:
                pixmap = QPixmap(str(overlay.image_path))
                if not pixmap.isNull():
                    self._overlay_pixmap = pixmap
        self.update()

    def _board_rect(self) -> QRectF:
        side = min(self.width(), self.height())
        return QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

    def _index_at(self, x: float, y: float) -> int:
        board = self._board_rect()
        if not board.contains(x, y):
            return -1
        cell = board.width() / GRID_SIZE
        col = min(GRID_SIZE - 1, int((x - board.left()) // cell))
        row = min(GRID_SIZE - 1, int((y - board.top()) // cell))
        return row * GRID_SIZE + col

    def mouseMoveEvent(self, event) -> None:
        index = self._index_at(event.position().x(), event.position().y())
        if index != self._hover_index:
            self._hover_index = index
            self.update()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event) -> None:
        self._hover_index = -1
        self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event) -> None:
        if self._interactive and self._cover_text is None and event.button() == Qt.LeftButton:
            index = self._index_at(event.position().x(), event.position().y())
            if 0 <= index < TOTAL_CELLS:
                self.cell_clicked.emit(index)
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        board = self._board_rect()
        cell = board.width() / GRID_SIZE
        gap = max(4.0, cell * 0.06)
        radius = max(6.0, cell * 0.1)

        for index, on in enumerate(self._cells):
            row, col = divmod(index, GRID_SIZE)
            rect = QRectF(
                board.left() + col * cell + gap / 2,
                board.top() + row * cell + gap / 2,
                cell - gap,
                cell - gap,
            )
            if on:
                fill, border = GridColors.CELL_ON, GridColors.CELL_ON_BORDER
            elif self._interactive and index == self._hover_index:
                fill, border = GridColors.CELL_OFF_HOVER, blend_hex(GridColors.CELL_OFF_BORDER, "#FFFFFF", 0.2)
            else:
                fill, border = GridColors.CELL_OFF, GridColors.CELL_OFF_BORDER
            painter.setBrush(QColor(fill))
            painter.setPen(QPen(QColor(border), 4))
            painter.drawRoundedRect(rect, radius, radius)
            painter.setPen(QColor(0, 0, 0, 90) if on else QColor(255, 255, 255, 60))
            font = painter.font()
            font.setPointSize(max(8, int(cell * 0.1)))
            font.setBold(True)
            painter.setFont(font)
            painter.drawText(rect.adjusted(8, 6, -8, -6), Qt.AlignLeft | Qt.AlignTop, str(index + 1))

        if self._overlay_pixmap is not None:
            painter.setOpacity(self._overlay.opacity)
            painter.drawPixmap(board.toRect(), self._overlay_pixmap)
            painter.setOpacity(1.0)

        if self._cover_text is not None:
            painter.setBrush(QColor(GridColors.BLIND_COVER))
            painter.setPen(Qt.NoPen)
            painter.drawRoundedRect(board, radius, radius)
            self._draw_centered(painter, board, self._cover_text, GridColors.TEXT_ON_DARK)
        elif self._banner_text is not None:
            painter.setBrush(QColor(22, 163, 74, 200))
            painter.setPen(Qt.NoPen)
            painter.drawRoundedRect(board, radius, radius)
            self._draw_centered(painter, board, self._banner_text, "#FFFFFF")

    def _draw_centered(self, painter: QPainter, rect: QRectF, text: str, color: str) -> None:
        painter.setPen(QColor(color))
        font = painter.font()
        font.setPointSize(max(12, int(rect.width() * 0.06)))
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(rect, Qt.AlignCenter | Qt.TextWordWrap, text)
