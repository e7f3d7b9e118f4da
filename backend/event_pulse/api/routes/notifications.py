"""Notification Routes — attach notifications to events and reschedule them.

Invariants:
    - A notification always references an existing event (404 otherwise)
    - PATCH .../frequency displaces start_date from its stored value: repeating
      the same request keeps moving it forward

Design Decisions:
    - Rescheduling goes through EventNotify.edit_delivery_frequency(): the route
      never computes offsets itself
"""

import logging

from fastapi import APIRouter, Depends, status

from event_pulse.api.dependencies import (
    get_event_repository, get_notification_repository,
    load_event_or_404, load_notification_or_404,
)
from event_pulse.config import get_settings
from event_pulse.core.notify import Recipient, TransportMethod, new_notification
from event_pulse.core.signal_trigger import parse_signal_trigger
from event_pulse.schemas.event import (
    FrequencyUpdate, NotificationCreate, NotificationResponse,
    notification_response,
)
from event_pulse.services.event_store import (
    SqlEventRepository, SqlNotificationRepository,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.post(
    "", response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_notification(
    body: NotificationCreate,
    events: SqlEventRepository = Depends(get_event_repository),
    notifications: SqlNotificationRepository = Depends(
        get_notification_repository,
    ),
):
    """Create a notification for an existing event."""
    event = await load_event_or_404(body.event_id, events)
    notification = new_notification(
        scheduled_event=event,
        delivery_method=TransportMethod(
            body.delivery_kind, Recipient(body.delivery_recipient),
        ),
        delivery_frequency=body.delivery_frequency,
        notify_trigger=parse_signal_trigger(body.notify_trigger),
        start_date=body.start_date,
        recipients=[Recipient(r) for r in body.recipients],
        prefix=get_settings().notify_id_prefix,
    )
    await notifications.save(notification)
    logger.info(
        "Notification created", extra={"entity_id": str(notification.id)},
    )
    return notification_response(notification)


@router.get("/{notify_id}", response_model=NotificationResponse)
async def get_notification(
    notify_id: str,
    notifications: SqlNotificationRepository = Depends(
        get_notification_repository,
    ),
):
    """Get notification details."""
    return notification_response(
        await load_notification_or_404(notify_id, notifications),
    )


@router.patch("/{notify_id}/frequency", response_model=NotificationResponse)
async def update_delivery_frequency(
    notify_id: str,
    body: FrequencyUpdate,
    notifications: SqlNotificationRepository = Depends(
        get_notification_repository,
    ),
):
    """Switch delivery frequency and reschedule from the stored start date."""
    notification = await load_notification_or_404(notify_id, notifications)
    notification.edit_delivery_frequency(body.delivery_frequency)
    await notifications.save(notification)
    logger.info(
        f"Notification rescheduled to {notification.start_date.isoformat()}",
        extra={"entity_id": str(notification.id)},
    )
    return notification_response(notification)
