from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class StageOneRecord:
    invoice_date: str
    invoice_number: str
    customer_name: str
    subject: str

    def as_fields(self) -> tuple[str, str, str, str]:
        return (self.invoice_date, self.invoice_number, self.customer_name, self.subject)

    @classmethod
    def from_fields(cls, fields: tuple[str, ...] | list[str]) -> StageOneRecord:
        invoice_date, invoice_number, customer_name, subject = fields
        return cls(
            invoice_date=invoice_date,
            invoice_number=invoice_number,
            customer_name=customer_name,
            subject=subject,
        )


@dataclass(frozen=True)
class StageTwoRecord:
    description: str
    quantity: str
    unit_price: str
    remarks: str = ""


@dataclass(frozen=True)
class FinalRecord:
    invoice_date: str
    invoice_number: str
    customer_name: str
    subject: str
    description: str
    quantity: str
    unit_price: str
    remarks: str
    payment_due_date: str  # YYYY-MM-DD
    registered_at: str  # ISO datetime with offset

    def to_payload(self) -> dict[str, str]:
        return asdict(self)

    def stage_one(self) -> StageOneRecord:
        return StageOneRecord(
            invoice_date=self.invoice_date,
            invoice_number=self.invoice_number,
            customer_name=self.customer_name,
            subject=self.subject,
        )
