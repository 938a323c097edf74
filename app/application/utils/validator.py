from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.application.exceptions import ValidationFailure
from app.application.utils.stage_token import StageTokenCodec
from app.domain.entities.invoice import StageOneRecord

MAX_CUSTOM_ID_SIZE = 512
WARNING_THRESHOLD = 400
SAFE_MARGIN = 500

# Hard limit on a button's custom_id.
MAX_BUTTON_ID_LENGTH = 100

FIELD_LIMITS = {
    "invoice_number": ("Invoice number", 20),
    "customer_name": ("Customer name", 50),
    "subject": ("Subject", 100),
}


@dataclass(frozen=True)
class TokenSizeCheck:
    is_valid: bool
    current_size: int
    max_size: int
    warning: bool
    message: str | None = None


def validate_field_length(value: str, max_length: int) -> bool:
    return len(value) <= max_length


def parse_invoice_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except (ValueError, AttributeError):
        raise ValidationFailure(
            "invoice_date",
            "Invoice date must be a calendar date in YYYY-MM-DD format (e.g. 2025-07-16).",
        ) from None


def check_token_size(stage_one: StageOneRecord, codec: StageTokenCodec) -> TokenSizeCheck:
    current_size = codec.size_of(stage_one.as_fields())
    is_valid = current_size <= SAFE_MARGIN
    warning = WARNING_THRESHOLD < current_size <= SAFE_MARGIN

    message: str | None = None
    if not is_valid:
        message = "The form is too long. Please shorten the customer name or subject."
    elif warning:
        message = "The form is close to its size limit. Please keep entries brief."

    return TokenSizeCheck(
        is_valid=is_valid,
        current_size=current_size,
        max_size=MAX_CUSTOM_ID_SIZE,
        warning=warning,
        message=message,
    )


def validate_stage_one(stage_one: StageOneRecord) -> None:
    """Raise ValidationFailure naming the first offending field."""
    for field_name in ("invoice_date", "invoice_number", "customer_name", "subject"):
        if not getattr(stage_one, field_name).strip():
            raise ValidationFailure(field_name, f"{field_name.replace('_', ' ').capitalize()} is required.")

    parse_invoice_date(stage_one.invoice_date)

    for field_name, (label, max_length) in FIELD_LIMITS.items():
        if not validate_field_length(getattr(stage_one, field_name), max_length):
            raise ValidationFailure(field_name, f"{label} must be {max_length} characters or fewer.")
