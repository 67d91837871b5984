"""
Name: Timer Tests
"""

import pytest

from bug_tracker.crosscutting.timing import Timer

pytestmark = pytest.mark.unit


def test_unstarted_timer_reads_zero():
    assert Timer().elapsed_ms == 0.0


def test_stop_freezes_reading():
    with Timer() as timer:
        pass

    first = timer.elapsed_ms
    assert first >= 0
    assert timer.elapsed_ms == first


def test_stop_before_start():
    with pytest.raises(RuntimeError):
        Timer().stop()
