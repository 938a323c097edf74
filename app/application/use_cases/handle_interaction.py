from __future__ import annotations

import logging

from app.application.exceptions import UnsupportedInteraction
from app.application.ports.interaction_platform import InteractionPlatformPort
from app.application.use_cases.invoice_form import (
    InvoiceFormUseCase,
    button_id_for,
    token_for_button,
)
from app.application.utils import interaction_responses as responses
from app.application.utils import messages
from app.application.utils.stage_token import STAGE_TWO_PREFIX
from app.domain.entities.form_state import FormPhase
from app.domain.entities.interaction import Interaction, InteractionReply, InteractionType
from app.domain.entities.invoice import FinalRecord, StageOneRecord, StageTwoRecord

INVOICE_COMMAND = "invoice"
QUICK_INVOICE_COMMAND = "invoice-quick"


def _value(values: dict[str, str], key: str) -> str:
    return (values.get(key) or "").strip()


def stage_one_from_values(values: dict[str, str]) -> StageOneRecord:
    return StageOneRecord(
        invoice_date=_value(values, "invoice_date"),
        invoice_number=_value(values, "invoice_number"),
        customer_name=_value(values, "customer_name"),
        subject=_value(values, "subject"),
    )


def stage_two_from_values(values: dict[str, str]) -> StageTwoRecord:
    return StageTwoRecord(
        description=_value(values, "description"),
        quantity=_value(values, "quantity"),
        unit_price=_value(values, "unit_price"),
        remarks=_value(values, "remarks"),
    )


def quick_records_from_values(values: dict[str, str]) -> tuple[StageOneRecord, StageTwoRecord]:
    """Split the single-stage form: 'date,number,customer[,...]' and 'quantity,unit_price'."""
    basics = [part.strip() for part in _value(values, "basic_info").split(",")]
    basics += [""] * (3 - len(basics))
    amount = [part.strip() for part in _value(values, "amount_info").split(",", 1)]
    amount += [""] * (2 - len(amount))

    stage_one = StageOneRecord(
        invoice_date=basics[0],
        invoice_number=basics[1],
        customer_name=basics[2],
        subject=_value(values, "subject"),
    )
    stage_two = StageTwoRecord(
        description=_value(values, "description"),
        quantity=amount[0],
        unit_price=amount[1],
        remarks=_value(values, "remarks"),
    )
    return stage_one, stage_two


class HandleInteractionUseCase:
    def __init__(self, form: InvoiceFormUseCase, platform: InteractionPlatformPort) -> None:
        self._form = form
        self._platform = platform
        self._logger = logging.getLogger(__name__)

    def handle(self, interaction: Interaction) -> InteractionReply:
        self._logger.info(
            "Interaction received",
            extra={"interaction_type": interaction.type.name, "custom_id": interaction.custom_id},
        )

        if interaction.type == InteractionType.PING:
            return InteractionReply(body=responses.pong())

        if interaction.type == InteractionType.COMMAND:
            return self._handle_command(interaction)

        if interaction.type == InteractionType.BUTTON_CLICK:
            custom_id = interaction.custom_id or ""
            if custom_id.startswith(responses.CONTINUE_PREFIX):
                return self._handle_continue(custom_id)

        if interaction.type == InteractionType.MODAL_SUBMIT:
            return self._handle_modal(interaction)

        raise UnsupportedInteraction(
            f"Unsupported interaction type={interaction.type.name} custom_id={interaction.custom_id}"
        )

    def _handle_command(self, interaction: Interaction) -> InteractionReply:
        if interaction.command_name == INVOICE_COMMAND:
            return InteractionReply(body=responses.stage_one_form())
        if interaction.command_name == QUICK_INVOICE_COMMAND:
            return InteractionReply(body=responses.quick_form())
        raise UnsupportedInteraction(f"Unknown command {interaction.command_name!r}")

    def _handle_continue(self, custom_id: str) -> InteractionReply:
        result = self._form.resume(token_for_button(custom_id))
        if result.phase is FormPhase.FAILURE or result.token is None:
            return InteractionReply(body=responses.message(result.message or messages.SESSION_EXPIRED))
        return InteractionReply(body=responses.stage_two_form(result.token))

    def _handle_modal(self, interaction: Interaction) -> InteractionReply:
        custom_id = interaction.custom_id or ""

        if custom_id == responses.STAGE_ONE_MODAL_ID:
            result = self._form.submit_stage_one(stage_one_from_values(interaction.values))
            if result.phase is not FormPhase.AWAITING_STAGE_TWO or result.token is None:
                return InteractionReply(body=responses.message(result.message or messages.general_error()))
            return InteractionReply(
                body=responses.message(
                    result.message or messages.STAGE_ONE_DONE,
                    components=responses.button_row(button_id_for(result.token), messages.CONTINUE_LABEL),
                )
            )

        if custom_id.startswith(STAGE_TWO_PREFIX):
            prepared = self._form.prepare(custom_id, stage_two_from_values(interaction.values))
        elif custom_id == responses.QUICK_MODAL_ID:
            stage_one, stage_two = quick_records_from_values(interaction.values)
            prepared = self._form.prepare_single(stage_one, stage_two)
        else:
            raise UnsupportedInteraction(f"Unknown modal custom_id {custom_id!r}")

        if prepared.phase is not FormPhase.FORWARDING or prepared.record is None:
            return InteractionReply(body=responses.message(prepared.message or messages.general_error()))

        if self._form.config.deferred_forwarding and interaction.application_id and interaction.token:
            record = prepared.record
            return InteractionReply(
                body=responses.message(messages.processing(record.stage_one())),
                followup=lambda: self._forward_and_follow_up(record, interaction.application_id, interaction.token),
            )

        result = self._form.forward(prepared.record)
        return InteractionReply(
            body=responses.message(result.message or messages.general_error(), ephemeral=False)
        )

    def _forward_and_follow_up(self, record: FinalRecord, application_id: str, token: str) -> None:
        try:
            result = self._form.forward(record)
            content = result.message or messages.general_error(record.invoice_number)
        except Exception as e:
            self._logger.exception(
                "Deferred forwarding failed",
                extra={"invoice_number": record.invoice_number, "error": str(e)},
            )
            content = messages.general_error(record.invoice_number)

        if not self._form.config.skip_intermediate_cleanup:
            self._platform.delete_original(application_id, token)
        self._platform.send_followup(application_id, token, content, ephemeral=False)

