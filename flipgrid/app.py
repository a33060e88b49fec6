"""Application entry point and setup for Flip Grid Pro."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from flipgrid.core.config import load_settings
from flipgrid.core.errors import FlipGridError
from flipgrid.core.levels import LevelRepository
from flipgrid.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load optional sample levels, and show the window."""
    configure_logging()
    settings = load_settings()
    app = QApplication(sys.argv)
    app.setApplicationName("Flip Grid Pro")
    app.setApplicationDisplayName("Flip Grid Pro")

    levels = LevelRepository()
    if settings.load_sample_levels:
        try:
            loaded = levels.load_bundled()
        except FlipGridError as e:
            logging.warning("Could not load sample levels: %s", e)
        else:
            logging.info("Loaded %d sample level(s)", len(loaded))

    window = MainWindow(levels=levels, settings=settings)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        window.resize(screen.availableGeometry().size() * 0.8)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
