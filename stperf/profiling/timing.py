"""Wall-clock stopwatch used by call-tree nodes."""

import time
from collections.abc import Callable

Clock = Callable[[], float]


class Timer:
    """Stopwatch measuring seconds between ``start()`` and ``elapsed``.

    The clock is injectable so call trees can be driven by a fake clock
    in tests; it defaults to ``time.perf_counter``.

    Example:
        >>> timer = Timer()
        >>> timer.start()
        >>> do_work()
        >>> print(f"Took {timer.elapsed_ms:.2f}ms")
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or time.perf_counter
        self.start_time: float | None = None

    @property
    def running(self) -> bool:
        return self.start_time is not None

    def start(self) -> None:
        """Start (or restart) the stopwatch."""
        self.start_time = self.clock()

    @property
    def elapsed(self) -> float:
        """Seconds since ``start()``, or 0 if the stopwatch never started."""
        if self.start_time is None:
            return 0.0
        return max(self.clock() - self.start_time, 0.0)

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

    def restart(self) -> float:
        """Return the elapsed seconds and start measuring again."""
        now = self.clock()
        elapsed = 0.0 if self.start_time is None else max(now - self.start_time, 0.0)
        self.start_time = now
        return elapsed

    def stop(self) -> float:
        """Return the elapsed seconds and stop the stopwatch."""
        elapsed = self.elapsed
        self.start_time = None
        return elapsed
