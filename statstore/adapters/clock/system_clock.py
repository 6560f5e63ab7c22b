"""Clock adapters — wall clock and a fixed clock for tests and replays."""

import time

from statstore.application.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    def now(self) -> int:
        return int(time.time())


class FixedClock(ClockPort):
    """Always returns the same timestamp until moved with ``advance`` or ``set``."""

    def __init__(self, timestamp: int = 0):
        self._timestamp = int(timestamp)

    def now(self) -> int:
        return self._timestamp

    def set(self, timestamp: int) -> None:
        self._timestamp = int(timestamp)

    def advance(self, seconds: int = 1) -> int:
        self._timestamp += int(seconds)
        return self._timestamp
