"""In-window confirmation overlay for quitting a running competition."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, QEvent, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from flipgrid.ui.colors import GridColors


def _card_container(object_name: str) -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(340)
    container.setMaximumWidth(420)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: {GridColors.PANEL_BG};
            border: 1px solid {GridColors.PANEL_BORDER};
            border-radius: 14px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(24)
    shadow.setOffset(0, 8)
    shadow.setColor(QColor(15, 23, 42, 60))
    container.setGraphicsEffect(shadow)
    return container


def _overlay_background(parent: QWidget, on_click: Callable[[], None]) -> QWidget:
    overlay_bg = QWidget(parent)
    overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.5);")
    overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    overlay_bg.setMinimumSize(1, 1)
    overlay_bg.mousePressEvent = lambda e: on_click()
    return overlay_bg


def _button_style(background: str, color: str, hover: str) -> str:
    return f"""
        QPushButton {{
            background: {background};
            color: {color};
            padding: 9px 16px;
            border: none;
            border-radius: 8px;
            font-weight: 700;
            font-size: 13px;
        }}
        QPushButton:hover {{ background: {hover}; }}
    """


class QuitConfirmOverlay(QWidget):
    """Asks whether to abandon the current run and return to setup."""

    closed = Signal(bool)  # True if the quit was confirmed

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        main_layout.addWidget(_overlay_background(self, lambda: self._finish(False)), 0, 0)

        container = _card_container("quitContainer")
        content = QVBoxLayout(container)
        content.setContentsMargins(24, 22, 24, 22)
        content.setSpacing(14)

        icon_label = QLabel("⚠")
        icon_label.setAlignment(Qt.AlignCenter)
        icon_label.setStyleSheet(f"color: {GridColors.DANGER}; font-size: 28px; font-weight: 900;")
        content.addWidget(icon_label)

        title = QLabel("Quit the competition?")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"color: {GridColors.TEXT_PRIMARY}; font-size: 17px; font-weight: 800;")
        content.addWidget(title)

        msg = QLabel("Current progress will be lost. Return to the setup screen?")
        msg.setAlignment(Qt.AlignCenter)
        msg.setWordWrap(True)
        msg.setStyleSheet(f"color: {GridColors.TEXT_SECONDARY}; font-size: 13px;")
        content.addWidget(msg)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(10)
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setStyleSheet(_button_style("#f1f5f9", GridColors.TEXT_PRIMARY, "#e2e8f0"))
        cancel_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        cancel_btn.clicked.connect(lambda: self._finish(False))
        btn_row.addWidget(cancel_btn, 1)

        confirm_btn = QPushButton("Quit")
        confirm_btn.setStyleSheet(_button_style(GridColors.DANGER, "white", "#b91c1c"))
        confirm_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        confirm_btn.clicked.connect(lambda: self._finish(True))
        btn_row.addWidget(confirm_btn, 1)
        content.addLayout(btn_row)

        main_layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def _finish(self, confirmed: bool) -> None:
        self.hide()
        self.closed.emit(confirmed)

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)
