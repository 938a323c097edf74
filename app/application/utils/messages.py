from __future__ import annotations

from app.domain.entities.invoice import FinalRecord, StageOneRecord

STAGE_ONE_DONE = "Step 1 of 2 saved. Press the button below to enter the line items."
CONTINUE_LABEL = "Continue"
SESSION_EXPIRED = "Your session has expired. Please start again with /invoice."
IDENTIFIER_TOO_LONG = "The entries are too long to carry to the next step. Please shorten them and try again."


def recorded(record: FinalRecord) -> str:
    return (
        "Invoice registered.\n"
        f"Invoice number: {record.invoice_number}\n"
        f"Customer: {record.customer_name}\n"
        f"Payment due: {record.payment_due_date}\n"
        f"Registered at: {record.registered_at}"
    )


def processing(stage_one: StageOneRecord) -> str:
    return (
        "Invoice received, registering it now...\n"
        f"Invoice number: {stage_one.invoice_number}\n"
        f"Customer: {stage_one.customer_name}\n"
        "You will get a follow-up message with the result."
    )


def recorder_timeout(invoice_number: str) -> str:
    return (
        "The invoice sheet did not answer in time.\n"
        f"Invoice number: {invoice_number}\n"
        "Please try again in a moment."
    )


def recorder_failed(invoice_number: str) -> str:
    return (
        "Registering the invoice failed.\n"
        f"Invoice number: {invoice_number}\n"
        "Please try again or contact an administrator."
    )


def general_error(invoice_number: str | None = None) -> str:
    if invoice_number:
        return (
            "An error occurred while processing the invoice.\n"
            f"Invoice number: {invoice_number}\n"
            "Please try again or contact an administrator."
        )
    return "An error occurred. Please try again."
