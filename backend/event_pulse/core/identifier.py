"""Identifier Generator — fixed-width, time-ordered 12-byte entity identifiers.

Invariants:
    - Layout: 4-byte ASCII prefix (right-padded with 0x00) ++ 8-byte big-endian
      microsecond Unix timestamp
    - to_bytes() is always exactly 12 bytes; Identifier cannot hold any other length
    - Display form: prefix rendered upper-case, then 16 upper-case hex digits
    - Immutable once constructed, never recomputed

Design Decisions:
    - generate() is a stateless free function of (prefix, clock reading): no
      factory object, no singleton, safe to call from any thread
    - Same-microsecond collisions are accepted; callers needing global uniqueness
      scope the identifier themselves
    - Padding bytes display as '0' so the display form is always 20 characters
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone

from event_pulse.core.errors import (
    ErrorContext, InvalidEncodingError, InvalidInputStringError,
    InvalidLengthError, InvalidPrefixError,
)

PREFIX_SIZE = 4
TIMESTAMP_SIZE = 8
IDENTIFIER_SIZE = PREFIX_SIZE + TIMESTAMP_SIZE


@dataclass(frozen=True, order=True)
class Identifier:
    """12-byte prefix + timestamp value naming a domain entity."""
    raw: bytes

    def __post_init__(self):
        if len(self.raw) != IDENTIFIER_SIZE:
            raise InvalidLengthError(len(self.raw))

    def prefix(self) -> bytes:
        return self.raw[:PREFIX_SIZE]

    def timestamp(self) -> int:
        """Microseconds since the Unix epoch, as an unsigned 64-bit integer."""
        return int.from_bytes(self.raw[PREFIX_SIZE:], "big", signed=False)

    def created_at(self) -> datetime:
        seconds, micros = divmod(self.timestamp(), 1_000_000)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
            microsecond=micros,
        )

    def to_bytes(self) -> bytes:
        return self.raw

    def hex(self) -> str:
        """Lower-case hex of all 12 bytes — lossless, unlike the display form."""
        return self.raw.hex()

    @classmethod
    def from_hex(cls, text: str) -> "Identifier":
        try:
            data = bytes.fromhex(text)
        except ValueError:
            raise InvalidInputStringError(
                "identifier must be 24 hex digits", ErrorContext(raw_input=text),
            )
        return round_trip(data)

    def __str__(self) -> str:
        label = "".join(
            chr(b) if b else "0" for b in self.prefix()
        ).upper()
        return label + self.raw[PREFIX_SIZE:].hex().upper()


def encode_prefix(prefix: str) -> bytes:
    """Validate a caller-supplied prefix and pad it to 4 bytes."""
    try:
        encoded = prefix.encode("ascii")
    except UnicodeEncodeError:
        raise InvalidEncodingError(prefix)
    if not 1 <= len(encoded) <= PREFIX_SIZE:
        raise InvalidPrefixError(len(encoded))
    return encoded.ljust(PREFIX_SIZE, b"\x00")


def current_timestamp() -> int:
    """Current wall-clock time in microseconds since the Unix epoch."""
    return time.time_ns() // 1_000


def generate(prefix: str) -> Identifier:
    """Build a new identifier from `prefix` and the current wall clock."""
    head = encode_prefix(prefix)
    stamp = current_timestamp().to_bytes(TIMESTAMP_SIZE, "big", signed=False)
    return Identifier(head + stamp)


def round_trip(data: bytes) -> Identifier:
    """Rebuild an identifier from its 12 raw bytes (e.g. loaded from storage)."""
    if len(data) != IDENTIFIER_SIZE:
        raise InvalidLengthError(len(data))
    return Identifier(bytes(data))
