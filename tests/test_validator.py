"""
Tests for stage-one field validation and identifier size checks.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import ValidationFailure
from app.application.utils.stage_token import StageTokenCodec
from app.application.utils.validator import check_token_size, validate_stage_one
from app.domain.entities.invoice import StageOneRecord


def _stage_one(**overrides) -> StageOneRecord:
    values = {
        "invoice_date": "2025-07-16",
        "invoice_number": "INV-001",
        "customer_name": "Acme",
        "subject": "July invoice",
    }
    values.update(overrides)
    return StageOneRecord(**values)


def test_valid_stage_one_passes():
    validate_stage_one(_stage_one())


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"invoice_number": "X" * 21}, "invoice_number"),
        ({"customer_name": "C" * 51}, "customer_name"),
        ({"subject": "S" * 101}, "subject"),
        ({"invoice_date": "7/16"}, "invoice_date"),
        ({"invoice_date": "2025-02-30"}, "invoice_date"),
        ({"customer_name": "   "}, "customer_name"),
    ],
)
def test_validation_names_offending_field(overrides, field):
    with pytest.raises(ValidationFailure) as exc_info:
        validate_stage_one(_stage_one(**overrides))

    assert exc_info.value.field == field
    assert exc_info.value.message


def test_limits_are_inclusive():
    validate_stage_one(_stage_one(invoice_number="X" * 20, customer_name="C" * 50, subject="S" * 100))


def test_token_size_check_levels():
    codec = StageTokenCodec()

    small = check_token_size(_stage_one(), codec)
    assert small.is_valid and not small.warning and small.message is None
    assert small.max_size == 512

    # 4-byte characters inflate the encoded size quickly
    warned = check_token_size(_stage_one(customer_name="😀" * 50, subject="😀" * 25), codec)
    assert warned.is_valid and warned.warning
    assert 400 < warned.current_size <= 500

    rejected = check_token_size(_stage_one(customer_name="😀" * 50, subject="😀" * 100), codec)
    assert not rejected.is_valid
    assert rejected.message
