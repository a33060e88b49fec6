"""Running totals over a competition run."""

from __future__ import annotations

from typing import Iterable

from flipgrid.core.models import LevelRecord, Phase, RunStats


def totals(history: Iterable[LevelRecord], current: RunStats, phase: Phase) -> RunStats:
    """Total elapsed time and steps for the run so far.

    History always counts. The current level's stats are added while it is
    being played and during the brief LEVEL_COMPLETE phase that follows it.
    """
    elapsed = 0
    steps = 0
    for record in history:
        elapsed += record.stats.elapsed_seconds
        steps += record.stats.steps
    if phase in (Phase.PLAYING, Phase.LEVEL_COMPLETE):
        elapsed += current.elapsed_seconds
        steps += current.steps
    return RunStats(elapsed_seconds=elapsed, steps=steps)


def format_time(seconds: int) -> str:
    """Render seconds as ``MM:SS``; minutes are not capped at 59."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"
