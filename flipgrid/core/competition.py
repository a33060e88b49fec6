from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from flipgrid.core import grid as grid_engine
from flipgrid.core.config import DEFAULT_ADVANCE_DELAY_MS
from flipgrid.core.grid import Grid
from flipgrid.core.levels import Level
from flipgrid.core.models import LevelRecord, Phase, RunStats
from flipgrid.core.stats import totals

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """One-shot callback scheduling provided by the event loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


@dataclass
class RunState:
    """Everything a competition run owns, including its pending timer."""

    phase: Phase = Phase.SETUP
    levels: Tuple[Level, ...] = ()
    current_level_index: int = 0
    current_grid: Grid = field(default_factory=grid_engine.create_empty_grid)
    current_stats: RunStats = field(default_factory=RunStats)
    start_timestamp: Optional[float] = None
    history: List[LevelRecord] = field(default_factory=list)
    pending_advance: Optional[TimerHandle] = None
    # Bumped on every phase exit; a timer callback from an older epoch is stale.
    epoch: int = 0


class CompetitionRun:
    """State machine for a timed multi-level competition.

    Phases go SETUP -> IDLE -> PLAYING -> LEVEL_COMPLETE -> (PLAYING | ALL_COMPLETE).
    Every public operation is guarded by the phase it is valid in and
    returns False without touching state when called at the wrong time.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        clock: Callable[[], float] = time.time,
        advance_delay_ms: int = DEFAULT_ADVANCE_DELAY_MS,
        state: Optional[RunState] = None,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._advance_delay_ms = advance_delay_ms
        self._state = state if state is not None else RunState()
        self._listeners: List[Callable[[RunState], None]] = []

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def level_count(self) -> int:
        return len(self._state.levels)

    @property
    def current_level(self) -> Optional[Level]:
        s = self._state
        if 0 <= s.current_level_index < len(s.levels):
            return s.levels[s.current_level_index]
        return None

    def totals(self) -> RunStats:
        s = self._state
        return totals(s.history, s.current_stats, s.phase)

    def add_listener(self, callback: Callable[[RunState], None]) -> None:
        """Register *callback* to be called with the state after every change."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self._state)

    # -- transitions -------------------------------------------------------

    def start(self, levels: Sequence[Level]) -> bool:
        """SETUP -> IDLE with the first level loaded. No-op without levels."""
        s = self._state
        if s.phase is not Phase.SETUP or not levels:
            return False
        s.levels = tuple(levels)
        s.history = []
        self._load_level(0)
        self._enter(Phase.IDLE)
        return True

    def begin(self) -> bool:
        """IDLE -> PLAYING: reveal the board and start the clock."""
        s = self._state
        if s.phase is not Phase.IDLE:
            return False
        s.start_timestamp = self._clock()
        self._enter(Phase.PLAYING)
        self._complete_if_solved()
        return True

    def toggle(self, index: int) -> bool:
        """Apply a move. Ignored unless PLAYING."""
        s = self._state
        if s.phase is not Phase.PLAYING:
            return False
        s.current_grid = grid_engine.toggle(s.current_grid, index)
        if grid_engine.is_solved(s.current_grid):
            self._complete_level(steps=s.current_stats.steps + 1)
        else:
            s.current_stats.steps += 1
            self._notify()
        return True

    def tick(self) -> int:
        """Refresh the displayed elapsed time. Cosmetic; never used for scoring."""
        s = self._state
        if s.phase is not Phase.PLAYING or s.start_timestamp is None:
            return s.current_stats.elapsed_seconds
        elapsed = self._elapsed_since_start()
        if elapsed != s.current_stats.elapsed_seconds:
            s.current_stats.elapsed_seconds = elapsed
            self._notify()
        return elapsed

    def quit(self) -> bool:
        """Abandon the run and go back to SETUP. Caller confirms with the user first."""
        s = self._state
        if s.phase not in (Phase.IDLE, Phase.PLAYING, Phase.LEVEL_COMPLETE):
            return False
        s.start_timestamp = None
        self._enter(Phase.SETUP)
        return True

    def return_to_setup(self) -> bool:
        """ALL_COMPLETE -> SETUP. History stays visible until the next start."""
        if self._state.phase is not Phase.ALL_COMPLETE:
            return False
        self._enter(Phase.SETUP)
        return True

    # -- internals ---------------------------------------------------------

    def _enter(self, phase: Phase) -> None:
        s = self._state
        if s.pending_advance is not None:
            s.pending_advance.cancel()
            s.pending_advance = None
        s.epoch += 1
        logger.info("Phase %s -> %s", s.phase.value, phase.value)
        s.phase = phase
        self._notify()

    def _load_level(self, index: int) -> None:
        s = self._state
        s.current_level_index = index
        s.current_grid = tuple(s.levels[index].initial_state)
        s.current_stats = RunStats()
        s.start_timestamp = None

    def _elapsed_since_start(self) -> int:
        start = self._state.start_timestamp
        if start is None:
            return self._state.current_stats.elapsed_seconds
        return max(0, int(self._clock() - start))

    def _complete_if_solved(self) -> None:
        # A level may be authored already lit; that counts as an instant win.
        if grid_engine.is_solved(self._state.current_grid):
            self._complete_level(steps=self._state.current_stats.steps)

    def _complete_level(self, steps: int) -> None:
        s = self._state
        level = s.levels[s.current_level_index]
        final = RunStats(elapsed_seconds=self._elapsed_since_start(), steps=steps)
        s.current_stats = final
        s.history.append(LevelRecord(level_id=level.id, name=level.name, stats=replace(final)))
        logger.info(
            "Level %d/%d %r solved in %ds with %d step(s)",
            s.current_level_index + 1,
            len(s.levels),
            level.name,
            final.elapsed_seconds,
            final.steps,
        )
        self._enter(Phase.LEVEL_COMPLETE)
        epoch = s.epoch
        s.pending_advance = self._scheduler.call_later(
            self._advance_delay_ms, lambda: self._auto_advance(epoch)
        )

    def _auto_advance(self, epoch: int) -> None:
        s = self._state
        if s.phase is not Phase.LEVEL_COMPLETE or s.epoch != epoch:
            logger.debug("Ignoring stale auto-advance (epoch %d, now %d)", epoch, s.epoch)
            return
        s.pending_advance = None
        next_index = s.current_level_index + 1
        if next_index >= len(s.levels):
            self._enter(Phase.ALL_COMPLETE)
            return
        self._load_level(next_index)
        s.start_timestamp = self._clock()
        self._enter(Phase.PLAYING)
        self._complete_if_solved()
