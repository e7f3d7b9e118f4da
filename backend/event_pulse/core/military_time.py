"""Military Time — a 24-hour hour/minute/second clock value.

Invariants:
    - parse() accepts exactly three colon-delimited decimal fields ("HH:MM:SS")
    - parse() does NOT range-check: MilitaryTime(25, 0, 0) is a legal value
    - Range checks happen in to_calendar_time(), the conversion boundary
    - from_calendar_time() always succeeds

Design Decisions:
    - Lazy bounds checking: later code may hold an out-of-range value transiently
      before converting it
    - Frozen dataclass: immutable value, hashable, compares field-wise
"""

import logging
import re
from dataclasses import dataclass
from datetime import time

from event_pulse.core.errors import (
    CalendarConstructionError, ErrorContext, ParseError,
)

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_FIELD_NAMES = ("hour", "minute", "seconds")


@dataclass(frozen=True)
class MilitaryTime:
    hour: int
    minute: int
    second: int

    @classmethod
    def parse(cls, text: str) -> "MilitaryTime":
        """Parse "HH:MM:SS" into a MilitaryTime."""
        parts = text.strip().split(":")
        if len(parts) != 3:
            logger.error(
                "Invalid military time format", extra={"raw_input": text},
            )
            raise ParseError(
                "Invalid military time format",
                ErrorContext(raw_input=text),
            )
        values = []
        for name, part in zip(_FIELD_NAMES, parts):
            if not _DIGITS.fullmatch(part):
                logger.error(
                    f"Failed to parse military time {name}",
                    extra={"raw_input": text},
                )
                raise ParseError(
                    f"Failed to parse military time {name}",
                    ErrorContext(raw_input=text),
                )
            values.append(int(part))
        return cls(*values)

    def to_calendar_time(self) -> time:
        if self.hour > 23 or self.minute > 59 or self.second > 59:
            raise CalendarConstructionError(
                f"{self} is not a valid time of day",
            )
        return time(self.hour, self.minute, self.second)

    @classmethod
    def from_calendar_time(cls, value: time) -> "MilitaryTime":
        return cls(value.hour, value.minute, value.second)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
