"""Route Dependencies — repository providers and identifier lookups shared by routes.

Invariants:
    - Repositories are bound to the request's AsyncSession (one per request)
    - Missing records raise ResourceNotFoundError (mapped to 404 globally)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from event_pulse.core.errors import ResourceNotFoundError
from event_pulse.core.event import Event
from event_pulse.core.identifier import Identifier
from event_pulse.core.notify import EventNotify
from event_pulse.core.repository_protocols import (
    EventRepository, NotificationRepository,
)
from event_pulse.infrastructure.database import get_db
from event_pulse.services.event_store import (
    SqlEventRepository, SqlNotificationRepository,
)


def get_event_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlEventRepository:
    return SqlEventRepository(db)


def get_notification_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlNotificationRepository:
    return SqlNotificationRepository(db)


async def load_event_or_404(
    event_id: str, events: EventRepository,
) -> Event:
    event = await events.get(Identifier.from_hex(event_id))
    if event is None:
        raise ResourceNotFoundError("Event", event_id)
    return event


async def load_notification_or_404(
    notify_id: str, notifications: NotificationRepository,
) -> EventNotify:
    notification = await notifications.get(Identifier.from_hex(notify_id))
    if notification is None:
        raise ResourceNotFoundError("Notification", notify_id)
    return notification
