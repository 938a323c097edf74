from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PONG = 1
CHANNEL_MESSAGE_WITH_SOURCE = 4
MODAL = 9

ACTION_ROW = 1
BUTTON = 2
TEXT_INPUT = 4

SHORT = 1
PARAGRAPH = 2

PRIMARY_BUTTON = 1
EPHEMERAL_FLAG = 64

STAGE_ONE_MODAL_ID = "invoice_step1"
QUICK_MODAL_ID = "invoice_quick"
CONTINUE_PREFIX = "continue_"


@dataclass(frozen=True)
class TextInputSpec:
    custom_id: str
    label: str
    placeholder: str | None = None
    style: int = SHORT
    required: bool = True
    max_length: int | None = None

    def to_component(self) -> dict[str, Any]:
        component: dict[str, Any] = {
            "type": TEXT_INPUT,
            "custom_id": self.custom_id,
            "label": self.label,
            "style": self.style,
            "required": self.required,
        }
        if self.placeholder:
            component["placeholder"] = self.placeholder
        if self.max_length is not None:
            component["max_length"] = self.max_length
        return component


# A modal holds at most five inputs, hence the two-stage form.
STAGE_ONE_INPUTS = (
    TextInputSpec("invoice_date", "Invoice date", placeholder="e.g. 2025-07-16"),
    TextInputSpec("invoice_number", "Invoice number", placeholder="e.g. INV-001", max_length=20),
    TextInputSpec("customer_name", "Customer name", placeholder="e.g. Acme Inc.", max_length=50),
    TextInputSpec("subject", "Subject", placeholder="e.g. July invoice", max_length=100),
)

STAGE_TWO_INPUTS = (
    TextInputSpec("description", "Description (comma separated)", placeholder="e.g. Website, Hosting", style=PARAGRAPH),
    TextInputSpec("quantity", "Quantity (comma separated)", placeholder="e.g. 1,2"),
    TextInputSpec("unit_price", "Unit price (comma separated)", placeholder="e.g. 50000,30000"),
    TextInputSpec("remarks", "Remarks", placeholder="Optional", style=PARAGRAPH, required=False),
)

QUICK_INPUTS = (
    TextInputSpec("basic_info", "Basics (date,number,customer)", placeholder="e.g. 2025-07-16,INV-001,Acme"),
    TextInputSpec("subject", "Subject", placeholder="e.g. July invoice", max_length=100),
    TextInputSpec("description", "Description", placeholder="Details of the service", style=PARAGRAPH),
    TextInputSpec("amount_info", "Quantity,Unit price", placeholder="e.g. 1,50000"),
    TextInputSpec("remarks", "Remarks", placeholder="Optional", style=PARAGRAPH, required=False),
)


def pong() -> dict[str, Any]:
    return {"type": PONG}


def show_form(custom_id: str, title: str, inputs: tuple[TextInputSpec, ...]) -> dict[str, Any]:
    return {
        "type": MODAL,
        "data": {
            "custom_id": custom_id,
            "title": title,
            "components": [{"type": ACTION_ROW, "components": [spec.to_component()]} for spec in inputs],
        },
    }


def message(content: str, ephemeral: bool = True, components: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"content": content}
    if components:
        data["components"] = components
    if ephemeral:
        data["flags"] = EPHEMERAL_FLAG
    return {"type": CHANNEL_MESSAGE_WITH_SOURCE, "data": data}


def button_row(custom_id: str, label: str) -> list[dict[str, Any]]:
    return [
        {
            "type": ACTION_ROW,
            "components": [{"type": BUTTON, "style": PRIMARY_BUTTON, "label": label, "custom_id": custom_id}],
        }
    ]


def stage_one_form() -> dict[str, Any]:
    return show_form(STAGE_ONE_MODAL_ID, "Invoice form (1/2)", STAGE_ONE_INPUTS)


def stage_two_form(token: str) -> dict[str, Any]:
    return show_form(token, "Invoice form (2/2)", STAGE_TWO_INPUTS)


def quick_form() -> dict[str, Any]:
    return show_form(QUICK_MODAL_ID, "Invoice form", QUICK_INPUTS)
