"""Tests for clock adapters."""

import time

from statstore.adapters.clock.system_clock import FixedClock, SystemClock


def test_system_clock_is_current_seconds():
    before = int(time.time())
    now = SystemClock().now()
    after = int(time.time())
    assert isinstance(now, int)
    assert before <= now <= after


def test_fixed_clock_advance_and_set():
    clock = FixedClock(1000)
    assert clock.now() == 1000
    assert clock.advance(5) == 1005
    clock.set(42)
    assert clock.now() == 42
