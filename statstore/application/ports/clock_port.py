"""Port interface for the time source used to stamp writes."""

from abc import ABC, abstractmethod


class ClockPort(ABC):
    @abstractmethod
    def now(self) -> int:
        """Current time as seconds since the epoch."""
        ...
