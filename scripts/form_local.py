#!/usr/bin/env python3
"""
Interactive local harness for the two-stage invoice form (no HTTP, no Discord).

Usage:
  python3 scripts/form_local.py [--holidays-api]

What it does:
- Asks for the stage-one fields and prints the issued stage token
- Decodes the token the way a button click would
- Asks for the stage-two fields, merges, and "records" with the mock recorder
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from zoneinfo import ZoneInfo

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.use_cases.invoice_form import FormFlowConfig, InvoiceFormUseCase, button_id_for
from app.application.utils.business_days import BusinessDayCalculator, HolidayCache
from app.domain.entities.form_state import FormPhase
from app.domain.entities.invoice import StageOneRecord, StageTwoRecord
from app.infrastructure.holidays.holidays_jp_source import HolidaysJpSource
from app.infrastructure.holidays.static_source import StaticHolidaySource
from app.infrastructure.recorder.mock_recorder import MockRecorder
from app.infrastructure.store.token_continuity import TokenStageContinuity


def _ask(label: str, default: str = "") -> str:
    raw = input(f"{label}{f' [{default}]' if default else ''}: ").strip()
    return raw or default


def main() -> None:
    parser = argparse.ArgumentParser(description="Walk through the invoice form locally")
    parser.add_argument("--holidays-api", action="store_true", help="Use the remote holiday calendar")
    args = parser.parse_args()

    source = HolidaysJpSource() if args.holidays_api else StaticHolidaySource()
    recorder = MockRecorder()
    form = InvoiceFormUseCase(
        calculator=BusinessDayCalculator(HolidayCache(source)),
        recorder=recorder,
        continuity=TokenStageContinuity(),
        config=FormFlowConfig(deferred_forwarding=False, skip_intermediate_cleanup=True),
        timezone=ZoneInfo("Asia/Tokyo"),
    )

    print("\nStep 1/2")
    print("-" * 60)
    stage_one = StageOneRecord(
        invoice_date=_ask("Invoice date", "2025-07-16"),
        invoice_number=_ask("Invoice number", "INV-001"),
        customer_name=_ask("Customer name", "Acme"),
        subject=_ask("Subject", "July invoice"),
    )
    first = form.submit_stage_one(stage_one)
    print(first.message)
    if first.phase is not FormPhase.AWAITING_STAGE_TWO or first.token is None:
        return
    print(f"token: {first.token}")
    print(f"button custom_id ({len(button_id_for(first.token))} chars): {button_id_for(first.token)}")

    print("\nStep 2/2")
    print("-" * 60)
    stage_two = StageTwoRecord(
        description=_ask("Description", "Website"),
        quantity=_ask("Quantity", "1"),
        unit_price=_ask("Unit price", "50000"),
        remarks=_ask("Remarks"),
    )
    result = form.complete(first.token, stage_two)
    print(f"\nphase: {result.phase.value}")
    print(result.message)
    if result.record is not None:
        for key, value in result.record.to_payload().items():
            print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
