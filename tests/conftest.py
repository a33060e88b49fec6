"""Shared fixtures: a settable clock and a scheduler fired by hand."""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from flipgrid.core.competition import CompetitionRun
from flipgrid.core.levels import Level


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualHandle:
    def __init__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.handles: List[ManualHandle] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay_ms, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire_last(self, ignore_cancel: bool = False) -> Optional[ManualHandle]:
        """Run the most recent callback. With *ignore_cancel*, run it even if cancelled,
        the way a timer that raced its cancellation would."""
        if not self.handles:
            return None
        handle = self.handles[-1]
        if handle.cancelled and not ignore_cancel:
            return handle
        handle.fired = True
        handle.callback()
        return handle


# Solved in one toggle of the centre cell (index 4).
CENTRE_CROSS = (True, False, True, False, False, False, True, False, True)
# Solved in one toggle of the top-left corner (index 0).
TOP_LEFT = (False, False, True, False, True, True, True, True, True)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def two_levels() -> List[Level]:
    return [
        Level(id="a", name="Cross", initial_state=CENTRE_CROSS),
        Level(id="b", name="Corner", initial_state=TOP_LEFT),
    ]


@pytest.fixture()
def run(scheduler: ManualScheduler, clock: FakeClock) -> CompetitionRun:
    return CompetitionRun(scheduler, clock=clock, advance_delay_ms=1000)
