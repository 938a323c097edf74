from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class HolidaySourcePort(ABC):
    @abstractmethod
    def fetch_holidays(self, year: int) -> set[date]:
        """Return every public holiday of the year. Empty set when unknown."""
        raise NotImplementedError
