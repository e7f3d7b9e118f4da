"""Identifier Generator — tests for the 12-byte prefix + timestamp layout.

Tests cover:
    - generate() always yields 12 bytes with a padded prefix
    - timestamps are non-decreasing across sequential calls
    - round_trip() restores an identifier from its bytes and rejects other lengths
    - prefix length and encoding errors report the offending input
    - display form: upper-case prefix + 16 upper-case hex digits
"""

from datetime import datetime, timezone

import pytest

from event_pulse.core import identifier as identifier_module
from event_pulse.core.errors import (
    InvalidEncodingError, InvalidInputStringError, InvalidLengthError,
    InvalidPrefixError,
)
from event_pulse.core.identifier import (
    IDENTIFIER_SIZE, Identifier, generate, round_trip,
)


# ─── generate ────────────────────────────────────────────────────

@pytest.mark.parametrize("prefix", ["a", "ab", "abc", "EVNT"])
def test_generate_returns_twelve_bytes(prefix):
    uid = generate(prefix)
    assert len(uid.to_bytes()) == IDENTIFIER_SIZE


def test_generate_pads_short_prefix_with_zero_bytes():
    uid = generate("ab")
    assert uid.prefix() == b"ab\x00\x00"


def test_generate_keeps_four_byte_prefix_verbatim():
    assert generate("NTFY").prefix() == b"NTFY"


def test_generate_timestamps_are_non_decreasing():
    stamps = [generate("EVNT").timestamp() for _ in range(200)]
    assert stamps == sorted(stamps)


def test_generate_reads_wall_clock_in_microseconds(monkeypatch):
    monkeypatch.setattr(
        identifier_module, "current_timestamp", lambda: 0x65666768696A6B6C,
    )
    uid = generate("abcd")
    assert uid.to_bytes() == bytes(
        [0x61, 0x62, 0x63, 0x64, 0x65, 0x66, 0x67, 0x68, 0x69, 0x6A, 0x6B, 0x6C]
    )


def test_same_microsecond_identifiers_are_equal(monkeypatch):
    monkeypatch.setattr(identifier_module, "current_timestamp", lambda: 42)
    assert generate("EVNT") == generate("EVNT")


def test_created_at_matches_timestamp(monkeypatch):
    moment = datetime(2024, 2, 29, 12, 30, 15, 123456, tzinfo=timezone.utc)
    micros = int(moment.timestamp()) * 1_000_000 + moment.microsecond
    monkeypatch.setattr(identifier_module, "current_timestamp", lambda: micros)
    assert generate("EVNT").created_at() == moment


# ─── prefix validation ───────────────────────────────────────────

def test_prefix_longer_than_four_bytes_reports_length():
    with pytest.raises(InvalidPrefixError) as exc_info:
        generate("abcdefghi")
    assert exc_info.value.length == 9
    assert "9" in exc_info.value.message


def test_empty_prefix_reports_zero_length():
    with pytest.raises(InvalidPrefixError) as exc_info:
        generate("")
    assert exc_info.value.length == 0


def test_non_ascii_prefix_is_an_encoding_error():
    with pytest.raises(InvalidEncodingError):
        generate("é")


def test_prefix_error_is_validation_category():
    with pytest.raises(InvalidPrefixError) as exc_info:
        generate("toolong")
    assert exc_info.value.code == "INVALID_PREFIX"
    assert exc_info.value.http_status == 400


# ─── round_trip ──────────────────────────────────────────────────

def test_round_trip_restores_generated_identifier():
    uid = generate("EVNT")
    assert round_trip(uid.to_bytes()) == uid


@pytest.mark.parametrize("size", [0, 11, 13, 24])
def test_round_trip_rejects_wrong_length(size):
    with pytest.raises(InvalidLengthError) as exc_info:
        round_trip(b"\x01" * size)
    assert exc_info.value.length == size


def test_direct_construction_enforces_length():
    with pytest.raises(InvalidLengthError):
        Identifier(b"short")


def test_hex_round_trip():
    uid = generate("NTFY")
    assert Identifier.from_hex(uid.hex()) == uid
    assert len(uid.hex()) == 24


def test_from_hex_rejects_non_hex_text():
    with pytest.raises(InvalidInputStringError):
        Identifier.from_hex("z" * 24)


def test_from_hex_wrong_digit_count_is_length_error():
    with pytest.raises(InvalidLengthError) as exc_info:
        Identifier.from_hex("ab" * 11)
    assert exc_info.value.length == 11


# ─── accessors & display ─────────────────────────────────────────

EXAMPLE = bytes(
    [0x61, 0x62, 0x63, 0x64, 0x65, 0x66, 0x67, 0x68, 0x69, 0x6A, 0x6B, 0x6C]
)


def test_display_form_matches_reference_example():
    assert str(round_trip(EXAMPLE)) == "ABCD65666768696A6B6C"


def test_display_form_renders_padding_as_zero():
    uid = round_trip(b"ab\x00\x00" + b"\x00" * 7 + b"\x01")
    assert str(uid) == "AB00" + "0000000000000001"


def test_timestamp_is_big_endian_unsigned():
    uid = round_trip(b"EVNT" + b"\xff" * 8)
    assert uid.timestamp() == 2**64 - 1


def test_prefix_extracts_first_four_bytes():
    assert round_trip(EXAMPLE).prefix() == b"abcd"


def test_identifiers_order_by_bytes():
    early = round_trip(b"EVNT" + (1).to_bytes(8, "big"))
    late = round_trip(b"EVNT" + (2).to_bytes(8, "big"))
    assert early < late
