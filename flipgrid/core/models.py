"""Value types shared by the run controller and the stats view."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(Enum):
    SETUP = "SETUP"  # organiser edits the level list
    IDLE = "IDLE"  # level loaded, board hidden until the player begins
    PLAYING = "PLAYING"
    LEVEL_COMPLETE = "LEVEL_COMPLETE"  # brief success state before auto-advance
    ALL_COMPLETE = "ALL_COMPLETE"  # final summary


@dataclass
class RunStats:
    elapsed_seconds: int = 0
    steps: int = 0


@dataclass(frozen=True)
class LevelRecord:
    """Result of one completed level. Appended to the run history, never edited."""

    level_id: str
    name: str
    stats: RunStats
