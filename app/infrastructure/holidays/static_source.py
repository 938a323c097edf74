from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from app.application.ports.holiday_source import HolidaySourcePort


class StaticHolidaySource(HolidaySourcePort):
    def __init__(self, holidays: Iterable[date] = ()) -> None:
        self._holidays = set(holidays)
        self.fetch_count = 0
        self._logger = logging.getLogger(__name__)

    def fetch_holidays(self, year: int) -> set[date]:
        self.fetch_count += 1
        self._logger.info("Static holiday lookup", extra={"year": year})
        return {d for d in self._holidays if d.year == year}
