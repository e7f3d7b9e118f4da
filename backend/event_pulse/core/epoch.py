"""Epoch — tagged recurrence durations, their grammar, and their day arithmetic.

Invariants:
    - Epoch is a closed union of five frozen dataclasses; every function matches
      all five variants explicitly
    - "1d" and "1d1x" parse to SingleDay, never Day(CalendarData(1, 1))
    - Grammar: (<amount>?<unit>)(<coefficient>?x)?, unit in {y, m, w, d}
    - Text with no unit letter at all falls back to Day(1, 1); a unit letter
      outside {y, m, w, d} raises InvalidInputStringError
    - to_fixed_duration() uses 365/30/7-day approximations
    - Every duration is computed in constant time; spans outside the datetime
      range raise CalendarConstructionError
    - days_since() is calendar-exact for Month and Year and never clamps: an
      impossible target date raises CalendarConstructionError

Design Decisions:
    - Two duration operations kept separate: fixed approximation when no anchor
      instant exists, calendar walk when one does (a bill due on the 15th lands
      on the 15th of the next month, not 30 days later)
    - Lenient-vs-strict parse split kept as-is for compatibility with stored strings
"""

import logging
import re
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, datetime, timedelta

from event_pulse.core.domain_types import (
    DAYS_IN_MONTH, DAYS_IN_WEEK, DAYS_IN_YEAR, MONTHS_IN_YEAR, EpochUnit,
)
from event_pulse.core.errors import (
    CalendarConstructionError, ErrorContext, InvalidInputStringError,
)

logger = logging.getLogger(__name__)

_EPOCH_PATTERN = re.compile(
    r"(?P<amount>[1-9][0-9]*)?(?P<unit>[A-Za-z])(?:(?P<coefficient>[1-9][0-9]*)?x)?"
)
_SINGLE_DAY_FORMS = ("1d", "1d1x")


# ─── Variants ────────────────────────────────────────────────────

@dataclass(frozen=True)
class CalendarData:
    """Unit count per occurrence (amount) and number of repeat cycles (coefficient)."""
    amount: int = 1
    coefficient: int = 1


@dataclass(frozen=True)
class SingleDay:
    """Shorthand for one day, one repeat."""


@dataclass(frozen=True)
class Year:
    data: CalendarData


@dataclass(frozen=True)
class Month:
    data: CalendarData


@dataclass(frozen=True)
class Week:
    data: CalendarData


@dataclass(frozen=True)
class Day:
    data: CalendarData


Epoch = SingleDay | Year | Month | Week | Day


# ─── Construction ────────────────────────────────────────────────

def new_epoch(unit: str, data: CalendarData) -> Epoch:
    """Build an epoch from a unit letter. Unknown letters yield SingleDay."""
    match unit:
        case EpochUnit.YEAR.value:
            return Year(data)
        case EpochUnit.MONTH.value:
            return Month(data)
        case EpochUnit.WEEK.value:
            return Week(data)
        case EpochUnit.DAY.value:
            return Day(data)
        case _:
            return SingleDay()


def _scan(text: str) -> tuple[str, int, int]:
    """Extract (unit, amount, coefficient); defaults to ("d", 1, 1) on no match."""
    found = _EPOCH_PATTERN.search(text)
    if found is None:
        return EpochUnit.DAY.value, 1, 1
    amount = found.group("amount")
    coefficient = found.group("coefficient")
    return (
        found.group("unit"),
        int(amount) if amount else 1,
        int(coefficient) if coefficient else 1,
    )


def parse_epoch(text: str) -> Epoch:
    """Parse an epoch string such as "3m4x" (every 3 months, 4 repeats)."""
    unit, amount, coefficient = _scan(text)
    data = CalendarData(amount, coefficient)
    match unit:
        case "y":
            return Year(data)
        case "m":
            return Month(data)
        case "w":
            return Week(data)
        case "d":
            if text.strip() in _SINGLE_DAY_FORMS:
                return SingleDay()
            return Day(data)
        case _:
            logger.error(
                "Encountered invalid epoch unit", extra={"raw_input": text},
            )
            raise InvalidInputStringError(
                f"unrecognized epoch unit {unit!r}",
                ErrorContext(raw_input=text),
            )


def format_epoch(epoch: Epoch) -> str:
    """Canonical text form; defaults are always written out ("2y1x")."""
    match epoch:
        case SingleDay():
            return "1d1x"
        case Year(data):
            return f"{data.amount}y{data.coefficient}x"
        case Month(data):
            return f"{data.amount}m{data.coefficient}x"
        case Week(data):
            return f"{data.amount}w{data.coefficient}x"
        case Day(data):
            return f"{data.amount}d{data.coefficient}x"


def frequency(epoch: Epoch) -> int:
    """Number of repeat cycles; 1 for SingleDay."""
    match epoch:
        case SingleDay():
            return 1
        case Year(data) | Month(data) | Week(data) | Day(data):
            return data.coefficient


# ─── Durations ───────────────────────────────────────────────────

def _days(count: int) -> timedelta:
    """timedelta of `count` days; a span beyond timedelta's range is a calendar error."""
    try:
        return timedelta(days=count)
    except OverflowError:
        raise CalendarConstructionError(
            f"span of {count} days is out of range",
            ErrorContext(debug_info={"days": count}),
        )


def to_fixed_duration(epoch: Epoch) -> timedelta:
    """Approximate length using fixed day counts per unit."""
    match epoch:
        case SingleDay():
            return timedelta(days=1)
        case Year(data):
            return _days(data.amount * data.coefficient * DAYS_IN_YEAR)
        case Month(data):
            return _days(data.amount * data.coefficient * DAYS_IN_MONTH)
        case Week(data):
            return _days(data.amount * data.coefficient * DAYS_IN_WEEK)
        case Day(data):
            return _days(data.amount * data.coefficient)


def _shift(since: datetime, year: int, month: int) -> datetime:
    """Same day-of-month and time-of-day in another month; fails instead of clamping."""
    if not MINYEAR <= year <= MAXYEAR:
        raise CalendarConstructionError(
            f"year {year} is outside {MINYEAR}..{MAXYEAR}",
            ErrorContext(raw_input=since.isoformat()),
        )
    try:
        return since.replace(year=year, month=month)
    except ValueError as e:
        raise CalendarConstructionError(
            f"{year:04d}-{month:02d}-{since.day:02d} is not a valid date: {e}",
            ErrorContext(raw_input=since.isoformat()),
        )


def days_since(epoch: Epoch, since: datetime) -> int:
    """Calendar-exact number of days the epoch spans when anchored at `since`."""
    match epoch:
        case Month(data):
            # coefficient repeats of `amount` months, rolled over in one step
            total = since.month - 1 + data.amount * data.coefficient
            carry, month = divmod(total, MONTHS_IN_YEAR)
            end = _shift(since, since.year + carry, month + 1)
            return (end - since).days
        case Year(data):
            end = _shift(since, since.year + data.coefficient * data.amount, since.month)
            return (end - since).days
        case Week(data):
            return data.amount * data.coefficient * DAYS_IN_WEEK
        case Day(data):
            return data.amount * data.coefficient
        case SingleDay():
            return 1


def advance(epoch: Epoch, since: datetime) -> datetime:
    """Instant at which the epoch ends when anchored at `since`."""
    span = _days(days_since(epoch, since))
    try:
        return since + span
    except OverflowError:
        raise CalendarConstructionError(
            f"{since.isoformat()} plus {span.days} days is out of range",
            ErrorContext(raw_input=since.isoformat()),
        )
