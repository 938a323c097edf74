"""
Tests for the stage token codec that carries stage-one answers between requests.
"""

from __future__ import annotations

import pytest

from app.application.utils.stage_token import StageTokenCodec


STAGE_ONE = ("2025-07-16", "INV-001", "Acme", "July invoice")


def test_round_trip_preserves_fields_and_order():
    """Decoding an encoded token reproduces the fields unchanged."""
    codec = StageTokenCodec()
    token = codec.encode(STAGE_ONE)

    assert token.startswith("step2_")
    assert codec.decode(token) == STAGE_ONE


def test_round_trip_non_ascii_fields():
    """Multi-byte text survives the trip."""
    codec = StageTokenCodec()
    fields = ("2025-07-16", "請求-9", "株式会社サンプル", "7月分請求書")

    assert codec.decode(codec.encode(fields)) == fields


def test_token_is_identifier_safe_and_deterministic():
    """No '+', '/' or '=' in the token, and the same input always gives the same token."""
    codec = StageTokenCodec()
    fields = ("2025-07-16", "INV>>>???", "~~~~", "ÿÿÿ")
    token = codec.encode(fields)

    assert not set(token) & {"+", "/", "="}
    assert token == codec.encode(fields)


def test_delimiter_is_stripped_from_values():
    """Values containing the delimiter come back with it removed."""
    codec = StageTokenCodec()
    fields = ("2025-07-16", "INV|001", "A|c|m|e", "|July invoice|")

    assert codec.decode(codec.encode(fields)) == ("2025-07-16", "INV001", "Acme", "July invoice")


def test_empty_values_survive():
    codec = StageTokenCodec()
    fields = ("", "", "", "")

    assert codec.decode(codec.encode(fields)) == fields


@pytest.mark.parametrize(
    "token",
    [
        "garbage",
        "",
        "step2_",
        "step2_!!!notbase64!!!",
        "continue_MjAyNS0wNy0xNnxJTlYtMDAxfEFjbWV8SnVseSBpbnZvaWNlfA",
        "step2_ZnVsbA",  # "full", one field only
        "step2_YXxifGN8ZHxlfA",  # "a|b|c|d|e|", five fields
        "step2_YXxifGN8ZA",  # "a|b|c|d", no terminator
        "step2_5pel5pys",  # non-delimited UTF-8
    ],
)
def test_decode_rejects_foreign_or_malformed_tokens(token):
    """Anything that is not a well-formed stage token decodes to None."""
    assert StageTokenCodec().decode(token) is None


def test_decode_tolerates_non_string_input():
    codec = StageTokenCodec()

    assert codec.decode(None) is None
    assert codec.decode(12345) is None
    assert codec.decode(b"step2_YXxifGN8ZHw") is None


@pytest.mark.parametrize(
    "fields",
    [
        STAGE_ONE,
        ("a", "b", "c", "d"),
        ("ab", "b", "c", "d"),
        ("abc", "b", "c", "d"),
    ],
)
def test_decode_rejects_corrupted_token(fields):
    """A character appended to a valid token never yields a record."""
    codec = StageTokenCodec()

    assert codec.decode(codec.encode(fields) + "x") is None
    assert codec.decode(codec.encode(fields) + "A") is None


def test_decode_rejects_non_ascii_payload():
    assert StageTokenCodec().decode("step2_日本語") is None


def test_encode_requires_exact_arity():
    codec = StageTokenCodec()

    with pytest.raises(ValueError):
        codec.encode(("2025-07-16", "INV-001", "Acme"))


def test_size_of_matches_encoded_byte_length():
    codec = StageTokenCodec()

    assert codec.size_of(STAGE_ONE) == len(codec.encode(STAGE_ONE).encode("utf-8"))


def test_custom_prefix_is_required_on_decode():
    codec = StageTokenCodec(prefix="s1:")
    token = codec.encode(STAGE_ONE)

    assert token.startswith("s1:")
    assert codec.decode(token) == STAGE_ONE
    assert StageTokenCodec().decode(token) is None
