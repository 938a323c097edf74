"""
Tests for dispatching interactions to the invoice form flow.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import UnsupportedInteraction
from app.application.use_cases.handle_interaction import HandleInteractionUseCase, quick_records_from_values
from app.application.use_cases.invoice_form import FormFlowConfig
from app.application.utils import interaction_responses as responses
from app.application.utils import messages
from app.domain.entities.interaction import Interaction, InteractionType
from app.infrastructure.discord.mock_platform import MockDiscordPlatform


STAGE_ONE_VALUES = {
    "invoice_date": "2025-07-16",
    "invoice_number": "INV-001",
    "customer_name": "Acme",
    "subject": "July invoice",
}
STAGE_TWO_VALUES = {"description": "Website", "quantity": "1", "unit_price": "50000", "remarks": ""}


@pytest.fixture
def platform() -> MockDiscordPlatform:
    return MockDiscordPlatform()


def _handler(make_form, platform, **config) -> HandleInteractionUseCase:
    flow = FormFlowConfig(**{"deferred_forwarding": False, "skip_intermediate_cleanup": True, **config})
    return HandleInteractionUseCase(form=make_form(config=flow), platform=platform)


def _walk_to_stage_two(handler: HandleInteractionUseCase) -> str:
    reply = handler.handle(
        Interaction(type=InteractionType.MODAL_SUBMIT, custom_id="invoice_step1", values=STAGE_ONE_VALUES)
    )
    button = reply.body["data"]["components"][0]["components"][0]
    assert button["custom_id"].startswith("continue_")

    reply = handler.handle(Interaction(type=InteractionType.BUTTON_CLICK, custom_id=button["custom_id"]))
    assert reply.body["type"] == responses.MODAL
    return reply.body["data"]["custom_id"]


def test_ping_is_answered_with_pong(make_form, platform):
    reply = _handler(make_form, platform).handle(Interaction(type=InteractionType.PING))

    assert reply.body == {"type": 1}


def test_invoice_command_shows_stage_one_form(make_form, platform):
    reply = _handler(make_form, platform).handle(Interaction(type=InteractionType.COMMAND, command_name="invoice"))

    assert reply.body["type"] == responses.MODAL
    assert reply.body["data"]["custom_id"] == "invoice_step1"
    assert len(reply.body["data"]["components"]) == 4


def test_two_stage_flow_inline(make_form, platform, recorder):
    handler = _handler(make_form, platform)
    modal_id = _walk_to_stage_two(handler)
    assert modal_id.startswith("step2_")

    reply = handler.handle(
        Interaction(type=InteractionType.MODAL_SUBMIT, custom_id=modal_id, values=STAGE_TWO_VALUES)
    )

    assert reply.followup is None
    assert reply.body["data"]["content"].startswith("Invoice registered.")
    assert recorder.records[0].customer_name == "Acme"
    assert recorder.records[0].payment_due_date == "2025-08-29"


def test_two_stage_flow_deferred_with_cleanup(make_form, platform, recorder):
    handler = _handler(make_form, platform, deferred_forwarding=True, skip_intermediate_cleanup=False)
    modal_id = _walk_to_stage_two(handler)

    reply = handler.handle(
        Interaction(
            type=InteractionType.MODAL_SUBMIT,
            custom_id=modal_id,
            values=STAGE_TWO_VALUES,
            application_id="app-1",
            token="tok-1",
        )
    )

    assert reply.body["data"]["flags"] == responses.EPHEMERAL_FLAG
    assert recorder.records == []
    assert reply.followup is not None

    reply.followup()

    assert len(recorder.records) == 1
    assert platform.deleted == ["tok-1"]
    assert platform.followups[0][0].startswith("Invoice registered.")


def test_deferred_skip_cleanup(make_form, platform):
    handler = _handler(make_form, platform, deferred_forwarding=True, skip_intermediate_cleanup=True)
    modal_id = _walk_to_stage_two(handler)

    reply = handler.handle(
        Interaction(
            type=InteractionType.MODAL_SUBMIT,
            custom_id=modal_id,
            values=STAGE_TWO_VALUES,
            application_id="app-1",
            token="tok-1",
        )
    )
    reply.followup()

    assert platform.deleted == []
    assert len(platform.followups) == 1


def test_expired_button_reports_session_expired(make_form, platform):
    reply = _handler(make_form, platform).handle(
        Interaction(type=InteractionType.BUTTON_CLICK, custom_id="continue_bm9wZQ")
    )

    assert reply.body["data"]["content"] == messages.SESSION_EXPIRED


def test_quick_form_single_stage(make_form, platform, recorder):
    handler = _handler(make_form, platform)

    reply = handler.handle(Interaction(type=InteractionType.COMMAND, command_name="invoice-quick"))
    assert reply.body["data"]["custom_id"] == "invoice_quick"

    reply = handler.handle(
        Interaction(
            type=InteractionType.MODAL_SUBMIT,
            custom_id="invoice_quick",
            values={
                "basic_info": "2025-06-15, INV-002, Beta Corp, Tokyo",
                "subject": "June",
                "description": "Support",
                "amount_info": "2,30000",
                "remarks": "",
            },
        )
    )

    assert reply.body["data"]["content"].startswith("Invoice registered.")
    record = recorder.records[0]
    assert (record.invoice_number, record.quantity, record.unit_price) == ("INV-002", "2", "30000")
    assert record.payment_due_date == "2025-07-31"


def test_quick_values_tolerate_missing_parts():
    stage_one, stage_two = quick_records_from_values({"basic_info": "2025-06-15", "amount_info": "3"})

    assert stage_one.invoice_number == ""
    assert stage_two.quantity == "3" and stage_two.unit_price == ""


@pytest.mark.parametrize(
    "interaction",
    [
        Interaction(type=InteractionType.COMMAND, command_name="other"),
        Interaction(type=InteractionType.MODAL_SUBMIT, custom_id="unknown"),
        Interaction(type=InteractionType.BUTTON_CLICK, custom_id="other_button"),
        Interaction(type=InteractionType.AUTOCOMPLETE),
    ],
)
def test_unknown_interactions_are_rejected(make_form, platform, interaction):
    with pytest.raises(UnsupportedInteraction):
        _handler(make_form, platform).handle(interaction)
