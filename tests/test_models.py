"""Tests for flipgrid.ui.models – overlay settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from flipgrid.ui.models import DEFAULT_MASK_OPACITY, OverlaySettings, clamp_opacity


class TestOverlaySettings:
    def test_defaults(self):
        o = OverlaySettings()
        assert o.image_path is None
        assert o.opacity == DEFAULT_MASK_OPACITY == 0.8
        assert o.has_image is False

    def test_with_image(self, tmp_path: Path):
        o = OverlaySettings(image_path=tmp_path / "mask.png")
        assert o.has_image is True

    @pytest.mark.parametrize("value, expected", [(-1, 0.0), (0.35, 0.35), (1.7, 1.0)])
    def test_clamped_on_init(self, value, expected):
        assert OverlaySettings(opacity=value).opacity == expected

    def test_set_opacity_clamps(self):
        o = OverlaySettings()
        o.set_opacity(2)
        assert o.opacity == 1.0
        o.set_opacity(0.25)
        assert o.opacity == 0.25

    def test_clamp_opacity(self):
        assert clamp_opacity("0.5") == 0.5
