from abc import ABC, abstractmethod
from datetime import UTC, datetime


class IClock(ABC):
    """Source of the current time, injectable for deterministic tests"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a timezone-aware UTC datetime"""
        pass


class SystemClock(IClock):
    def now(self) -> datetime:
        return datetime.now(UTC)
