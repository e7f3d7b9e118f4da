"""Notification Rescheduling — new effective start date for a delivery frequency.

Invariants:
    - reschedule() is pure: same (start, frequency) always gives the same result
    - OnTrigger normalizes to UTC; DayPrior returns the start unchanged
      (the prior-day offset belongs to the trigger evaluator)
    - Monthly and Quarterly use fixed 30/90-day offsets, NOT calendar months

Design Decisions:
    - Offset table over if/elif chains: one place to read every frequency's displacement
    - The 30/90-day approximation intentionally differs from epoch.days_since();
      both behaviours are kept until the product decides otherwise
    - Naive datetimes are treated as already being in UTC
"""

from datetime import datetime, timedelta, timezone

from event_pulse.core.domain_types import (
    SECS_IN_BI_WEEKLY, SECS_IN_DAY, SECS_IN_MONTH, SECS_IN_QUARTER,
    SECS_IN_WEEK, SendFrequency,
)

FREQUENCY_OFFSETS: dict[SendFrequency, timedelta] = {
    SendFrequency.DAY_PRIOR: timedelta(0),
    SendFrequency.DAILY: timedelta(seconds=SECS_IN_DAY),
    SendFrequency.WEEKLY: timedelta(seconds=SECS_IN_WEEK),
    SendFrequency.BI_WEEKLY: timedelta(seconds=SECS_IN_BI_WEEKLY),
    SendFrequency.MONTHLY: timedelta(seconds=SECS_IN_MONTH),
    SendFrequency.QUARTERLY: timedelta(seconds=SECS_IN_QUARTER),
}


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def reschedule(current_start: datetime, frequency: SendFrequency) -> datetime:
    """Start date a notification moves to when switched to `frequency`."""
    if frequency is SendFrequency.ON_TRIGGER:
        return to_utc(current_start)
    return current_start + FREQUENCY_OFFSETS[frequency]
