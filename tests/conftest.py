from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import UpstreamError
from app.application.ports.recorder import RecorderPort
from app.application.use_cases.invoice_form import FormFlowConfig, InvoiceFormUseCase
from app.application.utils.business_days import BusinessDayCalculator, HolidayCache
from app.domain.entities.invoice import FinalRecord
from app.infrastructure.holidays.static_source import StaticHolidaySource
from app.infrastructure.store.token_continuity import TokenStageContinuity


class FakeRecorder(RecorderPort):
    def __init__(self, error: UpstreamError | Exception | None = None) -> None:
        self.error = error
        self.records: list[FinalRecord] = []

    def record(self, record: FinalRecord) -> None:
        if self.error is not None:
            raise self.error
        self.records.append(record)


@pytest.fixture
def recorder() -> FakeRecorder:
    return FakeRecorder()


@pytest.fixture
def calculator() -> BusinessDayCalculator:
    return BusinessDayCalculator(HolidayCache(StaticHolidaySource([date(2025, 1, 1), date(2025, 7, 21)])))


@pytest.fixture
def make_form(calculator, recorder):
    def _make(config: FormFlowConfig | None = None, continuity=None) -> InvoiceFormUseCase:
        return InvoiceFormUseCase(
            calculator=calculator,
            recorder=recorder,
            continuity=continuity if continuity is not None else TokenStageContinuity(),
            config=config or FormFlowConfig(deferred_forwarding=False, skip_intermediate_cleanup=True),
            timezone=ZoneInfo("Asia/Tokyo"),
        )

    return _make
