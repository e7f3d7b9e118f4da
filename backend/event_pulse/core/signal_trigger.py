"""Signal Trigger — a daily fire-time plus a repeat interval in seconds.

Invariants:
    - Grammar: "M<HH:MM:SS>::I<seconds>", split on the literal "::I"
    - Anything other than exactly two segments raises InvalidInputStringError
    - Time or interval sub-parse failures raise ParseError
    - interval_seconds is a non-negative integer
    - No canonical to-string inverse lives here: formatting is the caller's job

Design Decisions:
    - Firing series (next_firing, count_firings) compute WHEN a trigger falls; they
      never decide whether to deliver — that belongs to a dispatcher outside core
    - Series anchor: the first `time`-of-day on or after the series start, in the
      start instant's own timezone
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from event_pulse.core.domain_types import IntervalSeconds
from event_pulse.core.errors import (
    CalendarConstructionError, ErrorContext, EventPulseError,
    InvalidInputStringError, ParseError,
)
from event_pulse.core.military_time import MilitaryTime

logger = logging.getLogger(__name__)

TIME_MARKER = "M"
INTERVAL_DELIMITER = "::I"
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SignalTrigger:
    # time-of-day the trigger first fires
    time: MilitaryTime
    # time-span between firings, in seconds
    interval_seconds: IntervalSeconds


def parse_signal_trigger(text: str) -> SignalTrigger:
    """Parse "M16:30:25::I86400" into a SignalTrigger."""
    parts = text.strip().split(INTERVAL_DELIMITER)
    if len(parts) != 2:
        logger.error("Invalid signal trigger format", extra={"raw_input": text})
        raise InvalidInputStringError(
            "Invalid signal trigger format", ErrorContext(raw_input=text),
        )

    time_part, interval_part = parts
    try:
        time = MilitaryTime.parse(time_part.lstrip(TIME_MARKER))
    except EventPulseError as e:
        logger.error(
            f"Failed to parse signal trigger time: {e}",
            extra={"raw_input": text},
        )
        raise ParseError(
            f"Failed to parse signal trigger time: {e}",
            ErrorContext(raw_input=text),
        )

    if not _DIGITS.fullmatch(interval_part):
        logger.error(
            "Failed to parse signal trigger interval",
            extra={"raw_input": text},
        )
        raise ParseError(
            "Failed to parse signal trigger interval",
            ErrorContext(raw_input=text),
        )

    trigger = SignalTrigger(time, IntervalSeconds(int(interval_part)))
    logger.debug(f"Signal trigger parsed successfully: {trigger}")
    return trigger


# ─── Firing Series ───────────────────────────────────────────────

def _interval(trigger: SignalTrigger) -> timedelta:
    try:
        return timedelta(seconds=trigger.interval_seconds)
    except OverflowError:
        raise CalendarConstructionError(
            f"interval of {trigger.interval_seconds} seconds is out of range",
            ErrorContext(debug_info={"interval_seconds": trigger.interval_seconds}),
        )


def first_firing(trigger: SignalTrigger, start: datetime) -> datetime:
    """First instant on or after `start` whose time-of-day equals trigger.time."""
    anchor = datetime.combine(
        start.date(), trigger.time.to_calendar_time(), tzinfo=start.tzinfo,
    )
    if anchor < start:
        anchor += timedelta(days=1)
    return anchor


def next_firing(
    trigger: SignalTrigger, start: datetime, after: datetime,
) -> datetime | None:
    """First firing at or after `after`, or None if the series already ended.

    A zero interval means the series holds a single firing. A firing past the
    last representable datetime counts as never.
    """
    anchor = first_firing(trigger, start)
    if after <= anchor:
        return anchor
    if trigger.interval_seconds == 0:
        return None
    interval = _interval(trigger)
    steps = -((anchor - after) // interval)  # ceiling division
    try:
        return anchor + steps * interval
    except OverflowError:
        return None


def count_firings(
    trigger: SignalTrigger, start: datetime, end: datetime,
) -> int:
    """Number of firings falling in [start, end)."""
    anchor = first_firing(trigger, start)
    if anchor >= end:
        return 0
    if trigger.interval_seconds == 0:
        return 1
    interval = _interval(trigger)
    return (end - anchor - timedelta(microseconds=1)) // interval + 1
