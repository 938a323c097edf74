from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from app.application.exceptions import (
    DecodeFailure,
    UpstreamError,
    UpstreamRejected,
    UpstreamTimeout,
    ValidationFailure,
)
from app.application.ports.recorder import RecorderPort
from app.application.ports.stage_continuity import StageContinuityPort
from app.application.utils import messages
from app.application.utils.business_days import BusinessDayCalculator
from app.application.utils.interaction_responses import CONTINUE_PREFIX
from app.application.utils.stage_token import STAGE_TWO_PREFIX, StageTokenCodec
from app.application.utils.validator import (
    MAX_BUTTON_ID_LENGTH,
    check_token_size,
    validate_stage_one,
)
from app.domain.entities.form_state import FormPhase, FormResult
from app.domain.entities.invoice import FinalRecord, StageOneRecord, StageTwoRecord


@dataclass(frozen=True)
class FormFlowConfig:
    recorder_timeout_seconds: float = 5.0
    skip_intermediate_cleanup: bool = False
    deferred_forwarding: bool = True


def button_id_for(token: str) -> str:
    return CONTINUE_PREFIX + token.removeprefix(STAGE_TWO_PREFIX)


def token_for_button(custom_id: str) -> str:
    return STAGE_TWO_PREFIX + custom_id.removeprefix(CONTINUE_PREFIX)


class InvoiceFormUseCase:
    """
    Drives one invoice conversation through its phases:
    awaiting_stage_one -> awaiting_stage_two -> merging -> forwarding -> success | failure.
    Each call handles one stateless request; stage one travels between
    requests inside the token issued by the continuity port.
    """

    def __init__(
        self,
        calculator: BusinessDayCalculator,
        recorder: RecorderPort,
        continuity: StageContinuityPort,
        config: FormFlowConfig,
        timezone: ZoneInfo,
        codec: StageTokenCodec | None = None,
    ) -> None:
        self._calculator = calculator
        self._recorder = recorder
        self._continuity = continuity
        self._config = config
        self._timezone = timezone
        self._codec = codec or StageTokenCodec()
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> FormFlowConfig:
        return self._config

    def submit_stage_one(self, stage_one: StageOneRecord) -> FormResult:
        # Validate what the token will actually carry.
        stage_one = StageOneRecord.from_fields(self._codec.sanitize(stage_one.as_fields()))
        try:
            validate_stage_one(stage_one)
        except ValidationFailure as e:
            self._logger.info("Stage one rejected", extra={"reason": e.field})
            return FormResult(phase=FormPhase.FAILURE, message=e.message, stage_one=stage_one)

        size = check_token_size(stage_one, self._codec)
        if not size.is_valid:
            self._logger.warning("Stage token too large", extra={"status": size.current_size})
            return FormResult(phase=FormPhase.FAILURE, message=size.message, stage_one=stage_one)

        try:
            token = self._continuity.issue(stage_one)
        except Exception as e:
            self._logger.exception("Failed to issue stage token", extra={"error": str(e)})
            return FormResult(phase=FormPhase.FAILURE, message=messages.general_error(), stage_one=stage_one)

        button_id = button_id_for(token)
        if len(button_id) > MAX_BUTTON_ID_LENGTH:
            self._logger.warning(
                "Button custom_id too long",
                extra={"invoice_number": stage_one.invoice_number, "status": len(button_id)},
            )
            return FormResult(phase=FormPhase.FAILURE, message=messages.IDENTIFIER_TOO_LONG, stage_one=stage_one)

        message = messages.STAGE_ONE_DONE
        if size.warning and size.message:
            message = f"{message}\n{size.message}"

        return FormResult(
            phase=FormPhase.AWAITING_STAGE_TWO,
            message=message,
            stage_one=stage_one,
            token=token,
        )

    def _resolve(self, token: str) -> StageOneRecord:
        stage_one = self._continuity.resolve(token)
        if stage_one is None:
            raise DecodeFailure(f"Unable to resolve stage token {token!r}")
        return stage_one

    def resume(self, token: str) -> FormResult:
        try:
            stage_one = self._resolve(token)
        except DecodeFailure:
            self._logger.info("Stage token rejected", extra={"custom_id": token})
            return FormResult(phase=FormPhase.FAILURE, message=messages.SESSION_EXPIRED)
        return FormResult(phase=FormPhase.AWAITING_STAGE_TWO, stage_one=stage_one, token=token)

    def merge(self, stage_one: StageOneRecord, stage_two: StageTwoRecord) -> FinalRecord:
        due_date = self._calculator.calculate_payment_due_date(stage_one.invoice_date)
        return FinalRecord(
            invoice_date=stage_one.invoice_date,
            invoice_number=stage_one.invoice_number,
            customer_name=stage_one.customer_name,
            subject=stage_one.subject,
            description=stage_two.description,
            quantity=stage_two.quantity,
            unit_price=stage_two.unit_price,
            remarks=stage_two.remarks,
            payment_due_date=due_date.isoformat(),
            registered_at=datetime.now(self._timezone).isoformat(timespec="seconds"),
        )

    def _merge_into_result(self, stage_one: StageOneRecord, stage_two: StageTwoRecord) -> FormResult:
        try:
            record = self.merge(stage_one, stage_two)
        except Exception as e:
            self._logger.exception(
                "Failed to merge invoice data",
                extra={"invoice_number": stage_one.invoice_number, "error": str(e)},
            )
            return FormResult(
                phase=FormPhase.FAILURE,
                message=messages.general_error(stage_one.invoice_number),
                stage_one=stage_one,
            )
        return FormResult(phase=FormPhase.FORWARDING, stage_one=stage_one, record=record)

    def prepare(self, token: str, stage_two: StageTwoRecord) -> FormResult:
        try:
            stage_one = self._resolve(token)
        except DecodeFailure:
            self._logger.info("Stage token rejected", extra={"custom_id": token})
            return FormResult(phase=FormPhase.FAILURE, message=messages.SESSION_EXPIRED)
        self._continuity.release(token)
        return self._merge_into_result(stage_one, stage_two)

    def prepare_single(self, stage_one: StageOneRecord, stage_two: StageTwoRecord) -> FormResult:
        try:
            validate_stage_one(stage_one)
        except ValidationFailure as e:
            self._logger.info("Single-stage form rejected", extra={"reason": e.field})
            return FormResult(phase=FormPhase.FAILURE, message=e.message, stage_one=stage_one)
        return self._merge_into_result(stage_one, stage_two)

    def forward(self, record: FinalRecord) -> FormResult:
        stage_one = record.stage_one()
        try:
            self._recorder.record(record)
        except UpstreamTimeout:
            self._logger.warning(
                "Recorder timed out",
                extra={"invoice_number": record.invoice_number, "reason": "timeout"},
            )
            message = messages.recorder_timeout(record.invoice_number)
        except UpstreamRejected as e:
            self._logger.warning(
                "Recorder rejected invoice",
                extra={"invoice_number": record.invoice_number, "status": e.status_code},
            )
            message = messages.recorder_failed(record.invoice_number)
        except UpstreamError as e:
            self._logger.warning(
                "Recorder unreachable",
                extra={"invoice_number": record.invoice_number, "error": str(e)},
            )
            message = messages.recorder_failed(record.invoice_number)
        except Exception as e:
            self._logger.exception(
                "Unexpected error while recording invoice",
                extra={"invoice_number": record.invoice_number, "error": str(e)},
            )
            message = messages.general_error(record.invoice_number)
        else:
            self._logger.info("Invoice recorded", extra={"invoice_number": record.invoice_number})
            return FormResult(
                phase=FormPhase.SUCCESS,
                message=messages.recorded(record),
                stage_one=stage_one,
                record=record,
            )

        return FormResult(phase=FormPhase.FAILURE, message=message, stage_one=stage_one, record=record)

    def complete(self, token: str, stage_two: StageTwoRecord) -> FormResult:
        prepared = self.prepare(token, stage_two)
        if prepared.phase is not FormPhase.FORWARDING or prepared.record is None:
            return prepared
        return self.forward(prepared.record)

    def complete_single(self, stage_one: StageOneRecord, stage_two: StageTwoRecord) -> FormResult:
        prepared = self.prepare_single(stage_one, stage_two)
        if prepared.phase is not FormPhase.FORWARDING or prepared.record is None:
            return prepared
        return self.forward(prepared.record)
