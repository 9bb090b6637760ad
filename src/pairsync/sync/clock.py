"""Clock providers used to timestamp backup files."""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of the current local time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local timestamp."""


class SystemClock(Clock):
    """Clock backed by the system wall clock."""

    def now(self) -> datetime:
        return datetime.now()
