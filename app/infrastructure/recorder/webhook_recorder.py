from __future__ import annotations

import logging

import httpx

from app.application.exceptions import UpstreamError, UpstreamRejected, UpstreamTimeout
from app.application.ports.recorder import RecorderPort
from app.domain.entities.invoice import FinalRecord

USER_AGENT = "invoice-form-bot/1.0"


class WebhookRecorder(RecorderPort):
    def __init__(self, url: str, timeout: float, client: httpx.Client | None = None) -> None:
        if not url:
            raise ValueError("RECORDER_WEBHOOK_URL is required for the webhook recorder")
        self._url = url
        self._timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def record(self, record: FinalRecord) -> None:
        headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        self._logger.info(
            "Sending invoice to recorder",
            extra={"invoice_number": record.invoice_number, "reason": f"timeout={self._timeout}s"},
        )
        try:
            resp = self._client.post(self._url, json=record.to_payload(), headers=headers, timeout=self._timeout)
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(f"Recorder did not answer within {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Recorder request failed: {e}") from e

        if not resp.is_success:
            self._logger.error(
                "Recorder responded with an error",
                extra={
                    "invoice_number": record.invoice_number,
                    "status": resp.status_code,
                    "error": resp.text[:500],
                },
            )
            raise UpstreamRejected(resp.status_code)

        self._logger.info(
            "Recorder accepted invoice",
            extra={"invoice_number": record.invoice_number, "status": resp.status_code},
        )
