"""Tests for flipgrid.core.config – environment-driven settings."""

from __future__ import annotations

import logging
from pathlib import Path

from flipgrid.core.config import DEFAULT_ADVANCE_DELAY_MS, DEFAULT_TICK_MS, Settings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        s = load_settings({})
        assert s.advance_delay_ms == DEFAULT_ADVANCE_DELAY_MS == 1000
        assert s.tick_ms == DEFAULT_TICK_MS == 100
        assert s.load_sample_levels is False
        assert s.export_dir == Settings.export_dir

    def test_overrides(self, tmp_path: Path):
        s = load_settings(
            {
                "FLIPGRID_ADVANCE_DELAY_MS": "250",
                "FLIPGRID_TICK_MS": "50",
                "FLIPGRID_SAMPLE_LEVELS": "1",
                "FLIPGRID_EXPORT_DIR": str(tmp_path),
            }
        )
        assert s.advance_delay_ms == 250
        assert s.tick_ms == 50
        assert s.load_sample_levels is True
        assert s.export_dir == tmp_path

    def test_bad_integer_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flipgrid.core.config"):
            s = load_settings({"FLIPGRID_TICK_MS": "fast"})
        assert s.tick_ms == DEFAULT_TICK_MS
        assert "FLIPGRID_TICK_MS" in caplog.text

    def test_negative_clamped(self):
        assert load_settings({"FLIPGRID_ADVANCE_DELAY_MS": "-5"}).advance_delay_ms == 0

    def test_sample_flag_needs_exact_one(self):
        assert load_settings({"FLIPGRID_SAMPLE_LEVELS": "yes"}).load_sample_levels is False

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("FLIPGRID_TICK_MS", "42")
        assert load_settings().tick_ms == 42
