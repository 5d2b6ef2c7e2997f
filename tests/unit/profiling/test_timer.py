"""Tests for the Timer stopwatch."""

import time

import pytest

from stperf.profiling.timing import Timer


class TestTimer:
    """Tests for Timer."""

    def test_not_started(self, clock):
        """Test an unstarted timer reports no elapsed time."""
        timer = Timer(clock)

        assert not timer.running
        assert timer.elapsed == 0.0

    def test_elapsed(self, clock):
        """Test elapsed follows the clock."""
        timer = Timer(clock)
        timer.start()
        clock.advance(0.25)

        assert timer.running
        assert timer.elapsed == pytest.approx(0.25)
        assert timer.elapsed_ms == pytest.approx(250.0)

    def test_restart(self, clock):
        """Test restart returns the lap and starts over."""
        timer = Timer(clock)
        timer.start()
        clock.advance(0.1)

        assert timer.restart() == pytest.approx(0.1)
        clock.advance(0.05)
        assert timer.elapsed == pytest.approx(0.05)

    def test_stop(self, clock):
        """Test stop returns the elapsed time and halts the timer."""
        timer = Timer(clock)
        timer.start()
        clock.advance(0.3)

        assert timer.stop() == pytest.approx(0.3)
        assert not timer.running
        assert timer.elapsed == 0.0

    def test_never_negative(self, clock):
        """Test a clock going backwards does not yield negative time."""
        timer = Timer(clock)
        timer.start()
        clock.advance(-1.0)

        assert timer.elapsed == 0.0

    def test_default_clock(self):
        """Test the real clock measures a short sleep."""
        timer = Timer()
        timer.start()
        time.sleep(0.01)

        assert timer.elapsed_ms >= 10
