from __future__ import annotations

import logging

from app.application.ports.recorder import RecorderPort
from app.domain.entities.invoice import FinalRecord


class MockRecorder(RecorderPort):
    def __init__(self) -> None:
        self.records: list[FinalRecord] = []
        self._logger = logging.getLogger(__name__)

    def record(self, record: FinalRecord) -> None:
        self.records.append(record)
        self._logger.info(
            "Mock recorder stored invoice",
            extra={"invoice_number": record.invoice_number, "reason": record.payment_due_date},
        )
