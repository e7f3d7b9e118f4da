"""Event — a recurring, time-triggered obligation (subscription, bill, reminder).

Invariants:
    - id is assigned once by new_event() (prefix "EVNT") and never changes
    - epoch and signal_trigger are validated value objects, never raw strings
    - end_datetime defaults to epoch.advance(start) — the calendar-exact end

Design Decisions:
    - Mutable dataclass with explicit edit methods: every field except id and
      created_at may change, but only through a named operation
    - Schedule queries delegate to epoch/signal_trigger: the record holds no
      arithmetic of its own
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from event_pulse.core import epoch as epochs
from event_pulse.core.epoch import Epoch
from event_pulse.core.errors import CalendarConstructionError
from event_pulse.core.identifier import Identifier, generate
from event_pulse.core.signal_trigger import (
    SignalTrigger, count_firings, next_firing,
)

EVENT_ID_PREFIX = "EVNT"


@dataclass
class Event:
    id: Identifier
    title: str
    amount: Decimal
    epoch: Epoch
    signal_trigger: SignalTrigger
    start_datetime: datetime
    end_datetime: datetime
    tags: list[str] | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # ─── Edits ──────────────────────────────────────────────────

    def rename(self, title: str) -> None:
        self.title = title

    def set_amount(self, amount: Decimal) -> None:
        self.amount = amount

    def set_epoch(self, epoch: Epoch, *, extend_end: bool = False) -> None:
        """Replace the recurrence; optionally recompute the end from the start."""
        self.epoch = epoch
        if extend_end:
            self.end_datetime = epochs.advance(epoch, self.start_datetime)

    def set_signal_trigger(self, trigger: SignalTrigger) -> None:
        self.signal_trigger = trigger

    def set_window(self, start: datetime, end: datetime) -> None:
        if end < start:
            raise CalendarConstructionError(
                f"end {end.isoformat()} precedes start {start.isoformat()}",
            )
        self.start_datetime = start
        self.end_datetime = end

    def add_tag(self, tag: str) -> None:
        if self.tags is None:
            self.tags = []
        if tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        if self.tags and tag in self.tags:
            self.tags.remove(tag)

    # ─── Schedule Queries ───────────────────────────────────────

    def fixed_duration(self) -> timedelta:
        return epochs.to_fixed_duration(self.epoch)

    def days_spanned(self) -> int:
        return epochs.days_since(self.epoch, self.start_datetime)

    def next_firing(self, after: datetime) -> datetime | None:
        """Next trigger instant inside the event window, or None."""
        fire = next_firing(self.signal_trigger, self.start_datetime, after)
        if fire is None or fire >= self.end_datetime:
            return None
        return fire

    def firing_count(self) -> int:
        return count_firings(
            self.signal_trigger, self.start_datetime, self.end_datetime,
        )


def new_event(
    title: str,
    amount: Decimal,
    epoch: Epoch,
    signal_trigger: SignalTrigger,
    start_datetime: datetime,
    end_datetime: datetime | None = None,
    tags: list[str] | None = None,
    prefix: str = EVENT_ID_PREFIX,
) -> Event:
    """Create an event with a fresh identifier."""
    if end_datetime is None:
        end_datetime = epochs.advance(epoch, start_datetime)
    elif end_datetime < start_datetime:
        raise CalendarConstructionError(
            f"end {end_datetime.isoformat()} precedes start {start_datetime.isoformat()}",
        )
    return Event(
        id=generate(prefix),
        title=title,
        amount=amount,
        epoch=epoch,
        signal_trigger=signal_trigger,
        start_datetime=start_datetime,
        end_datetime=end_datetime,
        tags=tags,
    )
