from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from flipgrid.core.competition import CompetitionRun, RunState
from flipgrid.core.config import Settings
from flipgrid.core.levels import LevelRepository
from flipgrid.core.models import Phase
from flipgrid.core.stats import format_time
from flipgrid.ui.admin_panel import AdminPanel
from flipgrid.ui.colors import GridColors
from flipgrid.ui.custom_overlay import QuitConfirmOverlay
from flipgrid.ui.grid_widget import GridWidget
from flipgrid.ui.models import OverlaySettings
from flipgrid.ui.scheduler import QtScheduler

logger = logging.getLogger(__name__)


def _stat_value(text: str, size: int = 30, color: str = GridColors.TEXT_PRIMARY) -> QLabel:
    label = QLabel(text)
    label.setStyleSheet(f"color: {color}; font-size: {size}px; font-weight: 900; font-family: monospace;")
    return label


def _muted(text: str) -> QLabel:
    label = QLabel(text)
    label.setStyleSheet(f"color: {GridColors.TEXT_SECONDARY}; font-size: 12px; font-weight: 700;")
    return label


def _card() -> QFrame:
    card = QFrame()
    card.setObjectName("statCard")
    card.setStyleSheet(
        f"""
        QFrame#statCard {{
            background: {GridColors.PANEL_BG};
            border: 1px solid {GridColors.PANEL_BORDER};
            border-radius: 12px;
        }}
        """
    )
    return card


class MainWindow(QMainWindow):
    """Setup screen plus the competition screen, driven by a CompetitionRun.

    The window never mutates run state itself: it forwards clicks to the
    controller and re-renders from the state handed to its listener.
    """

    def __init__(self, levels: LevelRepository, settings: Settings) -> None:
        super().__init__()
        self._levels = levels
        self._settings = settings
        self._overlay_settings = OverlaySettings()
        self._run = CompetitionRun(QtScheduler(self), advance_delay_ms=settings.advance_delay_ms)
        self._run.add_listener(self._render)

        self._tick_timer = QTimer(self)
        self._tick_timer.timeout.connect(self._run.tick)

        self.setWindowTitle("Flip Grid Pro")
        self.setStyleSheet(f"QMainWindow {{ background: {GridColors.BG}; }}")
        self._build_ui()
        self._render(self._run.state)

    def _build_ui(self) -> None:
        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._admin = AdminPanel(self._levels, self._settings.export_dir)
        self._admin.start_requested.connect(self._start_competition)
        self._stack.addWidget(self._admin)

        self._play_screen = QWidget()
        play = QVBoxLayout(self._play_screen)
        play.setContentsMargins(0, 0, 0, 0)
        play.setSpacing(0)
        play.addWidget(self._build_header())

        body = QHBoxLayout()
        body.setContentsMargins(24, 20, 24, 20)
        body.setSpacing(20)
        body.addLayout(self._build_board_column(), 3)
        body.addLayout(self._build_stats_column(), 2)
        play.addLayout(body, 1)
        self._stack.addWidget(self._play_screen)

        self._quit_overlay = QuitConfirmOverlay(self._play_screen)
        self._quit_overlay.closed.connect(self._on_quit_closed)

    def _build_header(self) -> QWidget:
        header = QFrame()
        header.setStyleSheet(f"background: {GridColors.HEADER_BG};")
        layout = QHBoxLayout(header)
        layout.setContentsMargins(20, 10, 20, 10)
        title = QLabel("Flip Grid Pro")
        title.setStyleSheet(f"color: {GridColors.TEXT_ON_DARK}; font-size: 20px; font-weight: 900;")
        layout.addWidget(title)
        layout.addStretch(1)
        self._level_indicator = QLabel("")
        self._level_indicator.setStyleSheet(f"color: {GridColors.TEXT_ON_DARK}; font-weight: 700;")
        layout.addWidget(self._level_indicator)
        quit_btn = QPushButton("Quit to setup")
        quit_btn.setCursor(Qt.PointingHandCursor)
        quit_btn.clicked.connect(self._ask_quit)
        layout.addWidget(quit_btn)
        return header

    def _build_board_column(self) -> QVBoxLayout:
        column = QVBoxLayout()
        goal = _muted("Goal: light up every cell")
        goal.setAlignment(Qt.AlignCenter)
        column.addWidget(goal)
        self._grid = GridWidget(min_side=300)
        self._grid.cell_clicked.connect(self._run.toggle)
        column.addWidget(self._grid, 1)

        mask_row = QHBoxLayout()
        mask_row.addWidget(_muted("Overlay image"))
        mask_btn = QPushButton("Choose…")
        mask_btn.clicked.connect(self._choose_overlay_image)
        mask_row.addWidget(mask_btn)
        self._opacity_label = _muted("")
        mask_row.addWidget(self._opacity_label)
        self._opacity_slider = QSlider(Qt.Horizontal)
        self._opacity_slider.setRange(0, 100)
        self._opacity_slider.setSingleStep(5)
        self._opacity_slider.setValue(int(round(self._overlay_settings.opacity * 100)))
        self._opacity_slider.valueChanged.connect(self._set_overlay_opacity)
        mask_row.addWidget(self._opacity_slider, 1)
        column.addLayout(mask_row)
        self._set_overlay_opacity(self._opacity_slider.value())
        return column

    def _build_stats_column(self) -> QVBoxLayout:
        column = QVBoxLayout()
        column.setSpacing(14)

        level_card = _card()
        lc = QVBoxLayout(level_card)
        self._level_name = QLabel("")
        self._level_name.setStyleSheet(f"color: {GridColors.PRIMARY}; font-size: 16px; font-weight: 800;")
        lc.addWidget(self._level_name)
        row = QHBoxLayout()
        time_col = QVBoxLayout()
        time_col.addWidget(_muted("TIME"))
        self._level_time = _stat_value("00:00")
        time_col.addWidget(self._level_time)
        row.addLayout(time_col)
        steps_col = QVBoxLayout()
        steps_col.addWidget(_muted("STEPS"))
        self._level_steps = _stat_value("0")
        steps_col.addWidget(self._level_steps)
        row.addLayout(steps_col)
        lc.addLayout(row)
        column.addWidget(level_card)

        total_card = _card()
        tc = QVBoxLayout(total_card)
        tc.addWidget(_muted("COMPETITION TOTAL"))
        row = QHBoxLayout()
        self._total_time = _stat_value("00:00", 24, GridColors.PRIMARY)
        self._total_steps = _stat_value("0", 24, GridColors.PRIMARY)
        row.addWidget(self._total_time)
        row.addWidget(self._total_steps)
        tc.addLayout(row)
        column.addWidget(total_card)

        self._begin_btn = QPushButton("Start challenge")
        self._begin_btn.setCursor(Qt.PointingHandCursor)
        self._begin_btn.setStyleSheet(
            f"QPushButton {{ background: {GridColors.PRIMARY}; color: white; font-size: 16px;"
            " font-weight: 800; padding: 12px; border-radius: 10px; }"
        )
        self._begin_btn.clicked.connect(self._run.begin)
        column.addWidget(self._begin_btn)

        self._summary = QTableWidget(0, 3)
        self._summary.setHorizontalHeaderLabels(["Level", "Time", "Steps"])
        self._summary.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self._summary.verticalHeader().setVisible(False)
        self._summary.setEditTriggers(QTableWidget.NoEditTriggers)
        column.addWidget(self._summary, 1)

        self._back_btn = QPushButton("Back to setup")
        self._back_btn.clicked.connect(self._run.return_to_setup)
        column.addWidget(self._back_btn)
        column.addStretch(1)
        return column

    # -- actions -----------------------------------------------------------

    def _start_competition(self) -> None:
        self._run.start(self._levels.all())

    def _ask_quit(self) -> None:
        if self._run.phase is Phase.ALL_COMPLETE:
            self._run.return_to_setup()
            return
        self._quit_overlay.show()
        self._quit_overlay.raise_()

    def _on_quit_closed(self, confirmed: bool) -> None:
        if confirmed:
            self._run.quit()

    def _choose_overlay_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Overlay image", "", "Images (*.png *.jpg *.jpeg *.bmp *.gif)")
        if not path:
            return
        self._overlay_settings.image_path = Path(path)
        self._grid.set_overlay(self._overlay_settings)

    def _set_overlay_opacity(self, value: int) -> None:
        self._overlay_settings.set_opacity(value / 100)
        self._opacity_label.setText(f"{round(self._overlay_settings.opacity * 100)}%")
        self._grid.set_overlay(self._overlay_settings)

    # -- rendering ---------------------------------------------------------

    def _render(self, state: RunState) -> None:
        phase = state.phase
        if phase is Phase.SETUP:
            self._tick_timer.stop()
            self._quit_overlay.hide()
            self._admin.refresh()
            self._stack.setCurrentWidget(self._admin)
            return

        self._stack.setCurrentWidget(self._play_screen)
        if phase is Phase.PLAYING:
            if not self._tick_timer.isActive():
                self._tick_timer.start(self._settings.tick_ms)
        else:
            self._tick_timer.stop()

        level = self._run.current_level
        self._level_indicator.setText(f"Level {state.current_level_index + 1} / {self._run.level_count}")
        self._level_name.setText(level.name if level is not None else "")
        self._grid.set_cells(state.current_grid)
        self._grid.set_interactive(phase is Phase.PLAYING)
        self._grid.set_cover("Ready? Press start" if phase is Phase.IDLE else None)
        banner: Optional[str] = None
        if phase is Phase.LEVEL_COMPLETE:
            banner = "Level complete!"
        elif phase is Phase.ALL_COMPLETE:
            banner = "All levels complete!"
        self._grid.set_banner(banner)

        self._level_time.setText(format_time(state.current_stats.elapsed_seconds))
        self._level_steps.setText(str(state.current_stats.steps))
        total = self._run.totals()
        self._total_time.setText(format_time(total.elapsed_seconds))
        self._total_steps.setText(f"{total.steps} steps")

        self._begin_btn.setVisible(phase is Phase.IDLE)
        finished = phase is Phase.ALL_COMPLETE
        self._summary.setVisible(finished)
        self._back_btn.setVisible(finished)
        if finished:
            self._fill_summary(state)

    def _fill_summary(self, state: RunState) -> None:
        rows = list(state.history)
        self._summary.setRowCount(len(rows) + 1)
        for row, record in enumerate(rows):
            self._summary.setItem(row, 0, QTableWidgetItem(record.name))
            self._summary.setItem(row, 1, QTableWidgetItem(format_time(record.stats.elapsed_seconds)))
            self._summary.setItem(row, 2, QTableWidgetItem(str(record.stats.steps)))
        total = self._run.totals()
        self._summary.setItem(len(rows), 0, QTableWidgetItem("Total"))
        self._summary.setItem(len(rows), 1, QTableWidgetItem(format_time(total.elapsed_seconds)))
        self._summary.setItem(len(rows), 2, QTableWidgetItem(str(total.steps)))

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop timers and cancel any pending auto-advance before closing."""
        self._tick_timer.stop()
        self._run.quit()
        super().closeEvent(event)
