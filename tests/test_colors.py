"""Tests for flipgrid.ui.colors – palette constants and color blending."""

from __future__ import annotations

import pytest

from flipgrid.ui.colors import GridColors, blend_hex


class TestGridColors:
    @pytest.mark.parametrize("name", ["CELL_ON", "CELL_OFF", "PRIMARY", "BLIND_COVER", "TEXT_PRIMARY"])
    def test_hex(self, name):
        value = getattr(GridColors, name)
        assert value.startswith("#")
        assert len(value) == 7


class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        assert blend_hex("#000000", "#FFFFFF", 0.5) == "#7F7F7F"

    def test_t_clamped(self):
        assert blend_hex("#000000", "#FFFFFF", 5) == "#FFFFFF"

    def test_malformed_returns_a(self):
        assert blend_hex("red", "#FFFFFF", 0.5) == "red"

    def test_bad_hex_digits_return_a(self):
        assert blend_hex("#GG0000", "#FFFFFF", 0.5) == "#GG0000"
