"""Shared fixtures: a controllable clock and a controller wired to it."""

from typing import List, Tuple

import pytest

from elements import elements_from_values
from engine import PlaybackController, Scheduler, SortingConfig


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def descending_source(size: int):
    return elements_from_values(range(size, 0, -1))


def drive_to_completion(ctrl: PlaybackController, clock: FakeClock, limit: int = 10_000) -> int:
    """Tick/acknowledge until nothing is pending.  Returns the number of actions."""
    actions = 0
    while actions < limit:
        if ctrl.pending_swap is not None and ctrl.is_playing:
            ctrl.acknowledge_swap()
        elif ctrl.scheduler.pending:
            clock.advance(5.0)
            ctrl.tick()
        else:
            break
        actions += 1
    return actions


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifications() -> List[Tuple[str, str]]:
    return []


@pytest.fixture
def make_controller(clock, notifications):
    def _make(values=(5, 3, 8, 1), **config_changes) -> PlaybackController:
        config = SortingConfig().with_changes(**config_changes)
        return PlaybackController(
            config=config,
            scheduler=Scheduler(clock=clock),
            array_source=descending_source,
            array=list(values),
            on_notify=lambda level, message: notifications.append((level, message)),
        )
    return _make
