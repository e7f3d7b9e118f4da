"""Event Notify — the notification attached to a scheduled event.

Invariants:
    - id is assigned once by new_notification() (prefix "NTFY") and never changes
    - notify_trigger is independent of the scheduled event's own trigger
    - edit_delivery_frequency() displaces start_date from its CURRENT value:
      calling it twice with Weekly moves the start 14 days in total
    - last_updated is refreshed by every edit
    - remaining_triggers() counts the tail of the series anchored at start_date;
      it never starts a new series at `now`

Design Decisions:
    - Rescheduling itself is the pure core/rescheduling.reschedule(); this record
      only stores the result (imperative shell over functional core)
    - Recipients matched by recipient_id; unknown ids are ignored, not errors
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from event_pulse.core.domain_types import (
    RecipientAddress, SendFrequency, TransportKind,
)
from event_pulse.core.event import Event
from event_pulse.core.identifier import Identifier, generate
from event_pulse.core.rescheduling import reschedule
from event_pulse.core.signal_trigger import SignalTrigger, count_firings

NOTIFY_ID_PREFIX = "NTFY"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Recipient:
    recipient_id: RecipientAddress


@dataclass(frozen=True)
class TransportMethod:
    """Delivery channel and the address it targets."""
    kind: TransportKind
    recipient: Recipient


@dataclass
class EventNotify:
    id: Identifier
    scheduled_event: Event
    delivery_method: TransportMethod
    delivery_frequency: SendFrequency
    notify_trigger: SignalTrigger
    start_date: datetime
    recipients: list[Recipient] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    last_updated: datetime = field(default_factory=_utcnow)

    def _touch(self) -> None:
        self.last_updated = _utcnow()

    def add_recipient(self, recipient: Recipient) -> None:
        self.recipients.append(recipient)
        self._touch()

    def remove_recipient(self, recipient_id: str) -> None:
        self.recipients = [
            r for r in self.recipients if r.recipient_id != recipient_id
        ]
        self._touch()

    def update_recipient(self, recipient_id: str, new_recipient: Recipient) -> None:
        for index, r in enumerate(self.recipients):
            if r.recipient_id == recipient_id:
                self.recipients[index] = new_recipient
                self._touch()
                return

    def list_recipients(self) -> list[Recipient]:
        return list(self.recipients)

    def set_event(self, event: Event) -> None:
        self.scheduled_event = event
        self._touch()

    def set_notify_trigger(self, trigger: SignalTrigger) -> None:
        self.notify_trigger = trigger
        self._touch()

    def edit_delivery_frequency(self, frequency: SendFrequency) -> datetime:
        """Store `frequency` and move start_date accordingly. Returns the new start."""
        self.delivery_frequency = frequency
        self.start_date = reschedule(self.start_date, frequency)
        self._touch()
        return self.start_date

    def remaining_triggers(self, now: datetime) -> int:
        """Firings of the series anchored at start_date that fall in [now, event end)."""
        end = self.scheduled_event.end_datetime
        if now >= end:
            return 0
        total = count_firings(self.notify_trigger, self.start_date, end)
        if now <= self.start_date:
            return total
        return total - count_firings(self.notify_trigger, self.start_date, now)

    def notification_details(self) -> str:
        recipients = ", ".join(r.recipient_id for r in self.recipients)
        return (
            f"Event: {self.scheduled_event.title}, "
            f"Method: {self.delivery_method.kind.value}, "
            f"Frequency: {self.delivery_frequency.value}, "
            f"Recipients: [{recipients}]"
        )


def new_notification(
    scheduled_event: Event,
    delivery_method: TransportMethod,
    delivery_frequency: SendFrequency,
    notify_trigger: SignalTrigger,
    start_date: datetime,
    recipients: list[Recipient] | None = None,
    prefix: str = NOTIFY_ID_PREFIX,
) -> EventNotify:
    """Create a notification with a fresh identifier."""
    created = _utcnow()
    return EventNotify(
        id=generate(prefix),
        scheduled_event=scheduled_event,
        delivery_method=delivery_method,
        delivery_frequency=delivery_frequency,
        notify_trigger=notify_trigger,
        start_date=start_date,
        recipients=list(recipients or []),
        created_at=created,
        last_updated=created,
    )
