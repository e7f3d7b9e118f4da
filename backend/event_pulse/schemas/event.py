"""Event Schemas — Pydantic models for event and notification API boundaries.

Invariants:
    - Grammar fields (epoch, signal_trigger, notify_trigger) stay raw strings here;
      core/ parsers own their validation and typed errors
    - Identifiers travel as 24 lower-case hex digits (lossless), with the
      upper-case display form alongside for humans
    - Datetimes without tzinfo are rejected: every instant is explicit

Design Decisions:
    - field_validator for side-effect-free transforms (strip, dedupe) — keeps models pure
    - Response builders live next to the schemas so routes stay thin
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from event_pulse.core.domain_types import SendFrequency, TransportKind
from event_pulse.core.epoch import format_epoch
from event_pulse.core.event import Event
from event_pulse.core.notify import EventNotify
from event_pulse.core.signal_trigger import SignalTrigger

IDENTIFIER_HEX_PATTERN = r"^[0-9a-f]{24}$"


def _require_aware(v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is None:
        raise ValueError("datetime must include a timezone offset")
    return v


# ─── Requests ────────────────────────────────────────────────────

class EventCreate(BaseModel):
    """Event creation — raw grammar strings plus the event window."""
    title: str = Field(min_length=1, max_length=500)
    amount: Decimal = Field(ge=0, max_digits=18, decimal_places=4)
    epoch: str = Field(min_length=1, max_length=32)
    signal_trigger: str = Field(min_length=1, max_length=64)
    start_datetime: datetime
    end_datetime: datetime | None = None
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def require_timezone(cls, v: datetime | None) -> datetime | None:
        return _require_aware(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return list(dict.fromkeys(t.strip() for t in v if t.strip()))


class NotificationCreate(BaseModel):
    """Notification creation for an existing event."""
    event_id: str = Field(pattern=IDENTIFIER_HEX_PATTERN)
    delivery_kind: TransportKind
    delivery_recipient: str = Field(min_length=1, max_length=255)
    delivery_frequency: SendFrequency
    notify_trigger: str = Field(min_length=1, max_length=64)
    start_date: datetime
    recipients: list[str] = Field(default_factory=list)

    @field_validator("start_date")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        return _require_aware(v)


class FrequencyUpdate(BaseModel):
    """Switch a notification to a new delivery frequency."""
    delivery_frequency: SendFrequency


# ─── Responses ───────────────────────────────────────────────────

class TriggerResponse(BaseModel):
    time: str
    interval_seconds: int


class EventResponse(BaseModel):
    id: str
    display_id: str
    title: str
    amount: Decimal
    epoch: str
    signal_trigger: TriggerResponse
    start_datetime: datetime
    end_datetime: datetime
    tags: list[str] | None
    created_at: datetime


class ScheduleResponse(BaseModel):
    """Duration and firing figures for one event."""
    event_id: str
    fixed_duration_days: int
    calendar_days: int
    frequency: int
    firing_count: int
    next_firing: datetime | None


class NotificationResponse(BaseModel):
    id: str
    display_id: str
    event_id: str
    delivery_kind: TransportKind
    delivery_recipient: str
    delivery_frequency: SendFrequency
    notify_trigger: TriggerResponse
    start_date: datetime
    recipients: list[str]
    last_updated: datetime


def trigger_response(trigger: SignalTrigger) -> TriggerResponse:
    return TriggerResponse(
        time=str(trigger.time), interval_seconds=trigger.interval_seconds,
    )


def event_response(event: Event) -> EventResponse:
    return EventResponse(
        id=event.id.hex(),
        display_id=str(event.id),
        title=event.title,
        amount=event.amount,
        epoch=format_epoch(event.epoch),
        signal_trigger=trigger_response(event.signal_trigger),
        start_datetime=event.start_datetime,
        end_datetime=event.end_datetime,
        tags=event.tags,
        created_at=event.created_at,
    )


def notification_response(notification: EventNotify) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id.hex(),
        display_id=str(notification.id),
        event_id=notification.scheduled_event.id.hex(),
        delivery_kind=notification.delivery_method.kind,
        delivery_recipient=notification.delivery_method.recipient.recipient_id,
        delivery_frequency=notification.delivery_frequency,
        notify_trigger=trigger_response(notification.notify_trigger),
        start_date=notification.start_date,
        recipients=[r.recipient_id for r in notification.recipients],
        last_updated=notification.last_updated,
    )
