from __future__ import annotations

import calendar
import logging
import threading
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from app.application.exceptions import BusinessDayScanExhausted
from app.application.ports.holiday_source import HolidaySourcePort

DEFAULT_MAX_SCAN_DAYS = 366


@dataclass(frozen=True)
class BusinessDayInfo:
    date: date
    is_business_day: bool
    next_business_day: date


class HolidayCache:
    """Per-year holiday sets, fetched lazily from the source and kept for the process lifetime."""

    def __init__(self, source: HolidaySourcePort) -> None:
        self._source = source
        self._years: dict[int, frozenset[date]] = {}
        self._locks: dict[int, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, year: int) -> threading.Lock:
        with self._lock_lock:
            if year not in self._locks:
                self._locks[year] = threading.Lock()
            return self._locks[year]

    def is_cached(self, year: int) -> bool:
        return year in self._years

    def seed(self, year: int, holidays: Iterable[date]) -> None:
        self._years[year] = frozenset(d for d in holidays if d.year == year)

    def get(self, year: int) -> frozenset[date]:
        cached = self._years.get(year)
        if cached is not None:
            return cached

        with self._get_lock(year):
            cached = self._years.get(year)
            if cached is not None:
                return cached

            # The source reports failures as an empty set; that result is cached too.
            holidays = self._source.fetch_holidays(year)
            self.seed(year, holidays)
            self._logger.info(
                "Holiday calendar cached",
                extra={"year": year, "status": f"{len(self._years[year])} holidays"},
            )
            return self._years[year]


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


class BusinessDayCalculator:
    def __init__(self, cache: HolidayCache, max_scan_days: int = DEFAULT_MAX_SCAN_DAYS) -> None:
        self._cache = cache
        self._max_scan_days = max_scan_days

    def is_holiday(self, day: date | str) -> bool:
        day = _as_date(day)
        return day in self._cache.get(day.year)

    def is_business_day(self, day: date | str) -> bool:
        day = _as_date(day)
        if day.weekday() >= 5:
            return False
        return not self.is_holiday(day)

    def next_business_day(self, day: date | str) -> date:
        return self._scan(_as_date(day), timedelta(days=1))

    def previous_business_day(self, day: date | str) -> date:
        return self._scan(_as_date(day), timedelta(days=-1))

    def _scan(self, start: date, step: timedelta) -> date:
        current = start
        for _ in range(self._max_scan_days):
            current += step
            if self.is_business_day(current):
                return current
        raise BusinessDayScanExhausted(
            f"No business day within {self._max_scan_days} days of {start.isoformat()}"
        )

    def calculate_payment_due_date(self, invoice_date: date | str) -> date:
        """Last business day of the month following the invoice date."""
        invoice_date = _as_date(invoice_date)
        if invoice_date.month == 12:
            year, month = invoice_date.year + 1, 1
        else:
            year, month = invoice_date.year, invoice_date.month + 1

        candidate = date(year, month, calendar.monthrange(year, month)[1])
        if self.is_business_day(candidate):
            return candidate
        return self.previous_business_day(candidate)

    def business_day_info(self, day: date | str) -> BusinessDayInfo:
        day = _as_date(day)
        is_business = self.is_business_day(day)
        return BusinessDayInfo(
            date=day,
            is_business_day=is_business,
            next_business_day=day if is_business else self.next_business_day(day),
        )
