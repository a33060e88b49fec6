"""Setup screen: author, import, export and remove levels before a competition."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from flipgrid.core.errors import FlipGridError
from flipgrid.core.grid import create_empty_grid, toggle_cell
from flipgrid.core.levels import LevelRepository, default_export_name
from flipgrid.ui.colors import GridColors
from flipgrid.ui.grid_widget import GridWidget

logger = logging.getLogger(__name__)


def _panel(object_name: str) -> QFrame:
    frame = QFrame()
    frame.setObjectName(object_name)
    frame.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: {GridColors.PANEL_BG};
            border: 1px solid {GridColors.PANEL_BORDER};
            border-radius: 12px;
        }}
        """
    )
    return frame


class AdminPanel(QWidget):
    """Edits the level list. Emits ``start_requested`` when the organiser starts."""

    start_requested = Signal()

    def __init__(self, levels: LevelRepository, export_dir: Path, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._levels = levels
        self._export_dir = export_dir
        self._editor_cells = create_empty_grid()

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 16, 24, 24)
        root.setSpacing(14)

        title = QLabel("Flip Grid Pro: competition setup")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"color: {GridColors.TEXT_PRIMARY}; font-size: 26px; font-weight: 900;")
        root.addWidget(title)

        body = QHBoxLayout()
        body.setSpacing(16)
        root.addLayout(body, 1)

        tabs = QTabWidget()
        tabs.addTab(self._build_editor_tab(), "Visual editor")
        tabs.addTab(self._build_import_tab(), "Import")
        body.addWidget(tabs, 3)

        list_panel = _panel("levelListPanel")
        list_layout = QVBoxLayout(list_panel)
        list_layout.setContentsMargins(14, 14, 14, 14)
        self._count_label = QLabel("")
        self._count_label.setStyleSheet(f"color: {GridColors.TEXT_PRIMARY}; font-weight: 800;")
        list_layout.addWidget(self._count_label)
        self._level_list = QListWidget()
        list_layout.addWidget(self._level_list, 1)

        row = QHBoxLayout()
        self._remove_btn = QPushButton("Delete selected")
        self._remove_btn.clicked.connect(self._remove_selected)
        row.addWidget(self._remove_btn)
        self._export_btn = QPushButton("Export…")
        self._export_btn.clicked.connect(self._export)
        row.addWidget(self._export_btn)
        self._copy_btn = QPushButton("Copy JSON")
        self._copy_btn.clicked.connect(self._copy_export)
        row.addWidget(self._copy_btn)
        list_layout.addLayout(row)

        self._start_btn = QPushButton("Start competition")
        self._start_btn.setCursor(Qt.PointingHandCursor)
        self._start_btn.setStyleSheet(
            f"""
            QPushButton {{
                background: {GridColors.SUCCESS}; color: white; font-size: 16px;
                font-weight: 800; padding: 12px; border-radius: 10px;
            }}
            QPushButton:disabled {{ background: #cbd5e1; color: #64748b; }}
            """
        )
        self._start_btn.clicked.connect(self.start_requested.emit)
        list_layout.addWidget(self._start_btn)
        body.addWidget(list_panel, 2)

        self.refresh()

    def _build_editor_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        hint = QLabel("Click cells to set the starting pattern (lit = on).")
        hint.setStyleSheet(f"color: {GridColors.TEXT_SECONDARY};")
        layout.addWidget(hint)
        self._editor = GridWidget(min_side=200)
        self._editor.set_interactive(True)
        self._editor.cell_clicked.connect(self._editor_toggle)
        layout.addWidget(self._editor, 1)

        row = QHBoxLayout()
        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("Level name (optional)")
        row.addWidget(self._name_edit, 1)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._editor_clear)
        row.addWidget(clear_btn)
        add_btn = QPushButton("Add level")
        add_btn.clicked.connect(self._add_from_editor)
        row.addWidget(add_btn)
        layout.addLayout(row)
        return tab

    def _build_import_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        hint = QLabel('Paste a JSON/YAML list of {"name", "initialState": [9 booleans]} objects.')
        hint.setWordWrap(True)
        hint.setStyleSheet(f"color: {GridColors.TEXT_SECONDARY};")
        layout.addWidget(hint)
        self._import_edit = QPlainTextEdit()
        layout.addWidget(self._import_edit, 1)
        row = QHBoxLayout()
        text_btn = QPushButton("Import text")
        text_btn.clicked.connect(self._import_from_text)
        row.addWidget(text_btn)
        file_btn = QPushButton("Import file…")
        file_btn.clicked.connect(self._import_from_file)
        row.addWidget(file_btn)
        layout.addLayout(row)
        return tab

    def refresh(self) -> None:
        """Rebuild the level list and enable/disable actions."""
        self._level_list.clear()
        for idx, level in enumerate(self._levels.all(), start=1):
            lit = sum(level.initial_state)
            item = QListWidgetItem(f"{idx}. {level.name}  ({lit}/9 lit)")
            item.setData(Qt.UserRole, level.id)
            self._level_list.addItem(item)
        has_levels = not self._levels.is_empty()
        self._count_label.setText(f"Levels ({len(self._levels)})")
        self._remove_btn.setEnabled(has_levels)
        self._export_btn.setEnabled(has_levels)
        self._copy_btn.setEnabled(has_levels)
        self._start_btn.setEnabled(has_levels)

    def _editor_toggle(self, index: int) -> None:
        self._editor_cells = toggle_cell(self._editor_cells, index)
        self._editor.set_cells(self._editor_cells)

    def _editor_clear(self) -> None:
        self._editor_cells = create_empty_grid()
        self._editor.set_cells(self._editor_cells)

    def _add_from_editor(self) -> None:
        self._levels.add_from_grid(self._editor_cells, self._name_edit.text())
        self._name_edit.clear()
        self.refresh()

    def _remove_selected(self) -> None:
        item = self._level_list.currentItem()
        if item is None:
            return
        self._levels.remove(item.data(Qt.UserRole))
        self.refresh()

    def _import_from_text(self) -> None:
        try:
            result = self._levels.import_text(self._import_edit.toPlainText())
        except FlipGridError as e:
            QMessageBox.warning(self, "Import failed", str(e))
            return
        self._import_edit.clear()
        self._report_import(len(result.accepted), result.rejected_count)

    def _import_from_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Import levels", str(self._export_dir), "Level files (*.json *.yaml *.yml);;All files (*)"
        )
        if not path:
            return
        try:
            result = self._levels.import_file(Path(path))
        except FlipGridError as e:
            QMessageBox.warning(self, "Import failed", str(e))
            return
        self._report_import(len(result.accepted), result.rejected_count)

    def _report_import(self, accepted: int, rejected: int) -> None:
        self.refresh()
        msg = f"Imported {accepted} level(s)."
        if rejected:
            msg += f" Skipped {rejected} invalid entr{'y' if rejected == 1 else 'ies'}."
        QMessageBox.information(self, "Import", msg)

    def _export(self) -> None:
        suggested = self._export_dir / default_export_name()
        path, _ = QFileDialog.getSaveFileName(self, "Export levels", str(suggested), "JSON (*.json)")
        if not path:
            return
        try:
            written = self._levels.export_file(Path(path))
        except (FlipGridError, OSError) as e:
            QMessageBox.warning(self, "Export failed", str(e))
            return
        QMessageBox.information(self, "Export", f"Saved {len(self._levels)} level(s) to {written}")

    def _copy_export(self) -> None:
        try:
            text = self._levels.export_text()
        except FlipGridError as e:
            QMessageBox.warning(self, "Export failed", str(e))
            return
        QGuiApplication.clipboard().setText(text)
        logger.info("Copied %d level(s) to clipboard", len(self._levels))
