from __future__ import annotations

import logging
from datetime import date

import httpx

from app.application.ports.holiday_source import HolidaySourcePort
from app.core.config import settings


class HolidaysJpSource(HolidaySourcePort):
    def __init__(
        self,
        url_template: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url_template = url_template or settings.HOLIDAY_API_URL_TEMPLATE
        self._client = client or httpx.Client(timeout=timeout or settings.HOLIDAY_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def fetch_holidays(self, year: int) -> set[date]:
        url = self._url_template.format(year=year)
        try:
            response = self._client.get(url)
        except httpx.TimeoutException:
            self._logger.warning("Holiday API timed out", extra={"year": year, "reason": "timeout"})
            return set()
        except httpx.HTTPError as e:
            self._logger.error("Holiday API unreachable", extra={"year": year, "error": str(e)})
            return set()

        if not response.is_success:
            self._logger.warning("Holiday API returned an error", extra={"year": year, "status": response.status_code})
            return set()

        try:
            data = response.json()
        except ValueError as e:
            self._logger.error("Holiday API returned invalid JSON", extra={"year": year, "error": str(e)})
            return set()
        if not isinstance(data, dict):
            self._logger.error("Holiday API returned unexpected payload", extra={"year": year})
            return set()

        holidays: set[date] = set()
        for key in data:
            try:
                holidays.add(date.fromisoformat(str(key)))
            except ValueError:
                continue
        return holidays
