from abc import ABC, abstractmethod
from datetime import datetime

from careshare.domain.base import utcnow


class IClock(ABC):
    """Source of "now" for every createdAt/expiresAt comparison"""

    @abstractmethod
    def now(self) -> datetime:
        """Current naive UTC time"""
        pass


class SystemClock(IClock):
    def now(self) -> datetime:
        return utcnow()
