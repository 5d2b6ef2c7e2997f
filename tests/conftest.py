"""
Shared fixtures for the stperf test suite.

Provides:
- A controllable fake clock so recorded durations are exact
- Fresh call trees and trackers driven by that clock
- The documented example workload
- Isolation of the process-wide default tracker
"""

from collections.abc import Callable, Iterator

import pytest

from stperf.config import ProfilerConfig
from stperf.profiling.tracker import ScopeTracker, get_tracker
from stperf.profiling.tree import CallTree


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tree(clock: FakeClock) -> CallTree:
    """Empty call tree driven by the fake clock."""
    return CallTree(clock=clock)


@pytest.fixture()
def tracker(clock: FakeClock) -> ScopeTracker:
    """Isolated tracker with default settings and the fake clock."""
    return ScopeTracker(ProfilerConfig(), clock=clock)


@pytest.fixture()
def run_example(clock: FakeClock) -> Callable[..., None]:
    """Record the documented example into a tree.

    Each ``main`` loop runs ``inner operations`` twice around one
    ``processing`` step, then one ``processing`` step directly.
    """

    def run(tree: CallTree, loops: int = 2, step: float = 0.1) -> None:
        def process() -> None:
            tree.enter("processing")
            clock.advance(step)
            tree.exit()

        for _ in range(loops):
            tree.enter("main")
            for _ in range(2):
                tree.enter("inner operations")
                process()
                tree.exit()
            process()
            tree.exit()

    return run


@pytest.fixture()
def default_tracker() -> Iterator[ScopeTracker]:
    """The process-wide tracker, reset and set to default settings."""
    tracker = get_tracker()
    previous = tracker._config
    tracker.config = ProfilerConfig()
    tracker.reset_current_thread()
    yield tracker
    tracker.reset_current_thread()
    tracker._config = previous
