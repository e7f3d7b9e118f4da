"""Event Store — SQLAlchemy repositories for events and notifications.

Invariants:
    - save() is create-or-update keyed on the 12-byte identifier (merge)
    - get() returns None for unknown identifiers; it never raises not-found
    - Loaded records are rebuilt through the core parsers, so a stored value
      that no longer parses surfaces as the parser's typed error
    - Instants are written in UTC and re-tagged as UTC on load (SQLite drops tzinfo)

Design Decisions:
    - Mapping functions kept module-level and pure: tested without a database
    - Repositories own commit(): callers persist a value object in one call
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from event_pulse.core.domain_types import SendFrequency, TransportKind
from event_pulse.core.epoch import format_epoch, parse_epoch
from event_pulse.core.event import Event
from event_pulse.core.identifier import Identifier, round_trip
from event_pulse.core.military_time import MilitaryTime
from event_pulse.core.notify import EventNotify, Recipient, TransportMethod
from event_pulse.core.rescheduling import to_utc
from event_pulse.core.signal_trigger import SignalTrigger
from event_pulse.models.event import EventRecord
from event_pulse.models.notification import NotificationRecord

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ─── Mapping ─────────────────────────────────────────────────────

def event_to_record(event: Event) -> EventRecord:
    return EventRecord(
        id=event.id.to_bytes(),
        title=event.title,
        amount=event.amount,
        epoch=format_epoch(event.epoch),
        tags=list(event.tags) if event.tags is not None else None,
        trigger_time=str(event.signal_trigger.time),
        trigger_interval_seconds=event.signal_trigger.interval_seconds,
        start_datetime=to_utc(event.start_datetime),
        end_datetime=to_utc(event.end_datetime),
        created_at=to_utc(event.created_at),
    )


def record_to_event(record: EventRecord) -> Event:
    return Event(
        id=round_trip(record.id),
        title=record.title,
        amount=Decimal(record.amount),
        epoch=parse_epoch(record.epoch),
        signal_trigger=SignalTrigger(
            MilitaryTime.parse(record.trigger_time),
            record.trigger_interval_seconds,
        ),
        start_datetime=_as_utc(record.start_datetime),
        end_datetime=_as_utc(record.end_datetime),
        tags=list(record.tags) if record.tags is not None else None,
        created_at=_as_utc(record.created_at),
    )


def notification_to_record(notification: EventNotify) -> NotificationRecord:
    return NotificationRecord(
        id=notification.id.to_bytes(),
        event_id=notification.scheduled_event.id.to_bytes(),
        delivery_kind=notification.delivery_method.kind.value,
        delivery_recipient=notification.delivery_method.recipient.recipient_id,
        delivery_frequency=notification.delivery_frequency.value,
        recipients=[r.recipient_id for r in notification.recipients],
        notify_time=str(notification.notify_trigger.time),
        notify_interval_seconds=notification.notify_trigger.interval_seconds,
        start_date=to_utc(notification.start_date),
        created_at=to_utc(notification.created_at),
        last_updated=to_utc(notification.last_updated),
    )


def record_to_notification(
    record: NotificationRecord, event: Event,
) -> EventNotify:
    return EventNotify(
        id=round_trip(record.id),
        scheduled_event=event,
        delivery_method=TransportMethod(
            TransportKind(record.delivery_kind),
            Recipient(record.delivery_recipient),
        ),
        delivery_frequency=SendFrequency(record.delivery_frequency),
        notify_trigger=SignalTrigger(
            MilitaryTime.parse(record.notify_time),
            record.notify_interval_seconds,
        ),
        start_date=_as_utc(record.start_date),
        recipients=[Recipient(r) for r in record.recipients],
        created_at=_as_utc(record.created_at),
        last_updated=_as_utc(record.last_updated),
    )


# ─── Repositories ────────────────────────────────────────────────

class SqlEventRepository:
    """EventRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def save(self, event: Event) -> Identifier:
        await self._db.merge(event_to_record(event))
        await self._db.commit()
        logger.debug("Event saved", extra={"entity_id": str(event.id)})
        return event.id

    async def get(self, event_id: Identifier) -> Event | None:
        result = await self._db.execute(
            select(EventRecord)
            .where(EventRecord.id == event_id.to_bytes())
            .execution_options(populate_existing=True),
        )
        record = result.scalar_one_or_none()
        return record_to_event(record) if record else None

    async def list_all(self) -> list[Event]:
        """Every stored event, oldest identifier first."""
        result = await self._db.execute(
            select(EventRecord).order_by(EventRecord.id),
        )
        return [record_to_event(record) for record in result.scalars()]


class SqlNotificationRepository:
    """NotificationRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def save(self, notification: EventNotify) -> Identifier:
        await self._db.merge(notification_to_record(notification))
        await self._db.commit()
        logger.debug(
            "Notification saved", extra={"entity_id": str(notification.id)},
        )
        return notification.id

    async def get(self, notify_id: Identifier) -> EventNotify | None:
        result = await self._db.execute(
            select(NotificationRecord)
            .where(NotificationRecord.id == notify_id.to_bytes())
            .options(selectinload(NotificationRecord.event))
            .execution_options(populate_existing=True),
        )
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return record_to_notification(record, record_to_event(record.event))
