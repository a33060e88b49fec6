"""Tests for flipgrid.ui.grid_widget – overlay image loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtWidgets import QApplication  # noqa: E402

import flipgrid.ui.grid_widget as grid_widget  # noqa: E402
from flipgrid.ui.models import OverlaySettings  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QApplication.instance() or QApplication([])


@pytest.fixture
def loads(monkeypatch):
    """Record every path GridWidget reads an overlay image from."""
    seen: list[str] = []

    class _CountingPixmap:
        def __init__(self, path: str) -> None:
            seen.append(path)

        def isNull(self) -> bool:
            return False

    monkeypatch.setattr(grid_widget, "QPixmap", _CountingPixmap)
    return seen


# ------------------------------------------------------------------
# set_overlay
# ------------------------------------------------------------------


class TestOverlayImageCache:
    def test_opacity_steps_reuse_loaded_image(self, qapp, loads, tmp_path: Path):
        widget = grid_widget.GridWidget()
        overlay = OverlaySettings(image_path=tmp_path / "mask.png")
        for step in range(0, 101, 5):
            overlay.set_opacity(step / 100)
            widget.set_overlay(overlay)
        assert loads == [str(tmp_path / "mask.png")]

    def test_new_path_reloads(self, qapp, loads, tmp_path: Path):
        widget = grid_widget.GridWidget()
        overlay = OverlaySettings(image_path=tmp_path / "a.png")
        widget.set_overlay(overlay)
        overlay.image_path = tmp_path / "b.png"
        widget.set_overlay(overlay)
        widget.set_overlay(overlay)
        assert loads == [str(tmp_path / "a.png"), str(tmp_path / "b.png")]

    def test_no_image_loads_nothing(self, qapp, loads):
        widget = grid_widget.GridWidget()
        widget.set_overlay(OverlaySettings(opacity=0.3))
        widget.set_overlay(OverlaySettings(opacity=0.6))
        assert loads == []
