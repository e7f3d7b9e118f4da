"""Event Routes — create, fetch, and query the schedule of recurring events.

Invariants:
    - Epoch and trigger strings parsed by core/ before anything is persisted
    - end_datetime defaults to the calendar-exact end of the epoch
    - Schedule figures computed on read, never stored
    - Tag filtering goes through core TagIndex built from the stored events

Design Decisions:
    - Grammar errors surface as the core's typed errors (400/422 via global handler)
      rather than pydantic field errors: one error vocabulary for the grammar
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status

from event_pulse.api.dependencies import get_event_repository, load_event_or_404
from event_pulse.config import get_settings
from event_pulse.core import epoch as epochs
from event_pulse.core.event import new_event
from event_pulse.core.signal_trigger import parse_signal_trigger
from event_pulse.core.tag_index import TagIndex
from event_pulse.schemas.event import (
    EventCreate, EventResponse, ScheduleResponse, event_response,
)
from event_pulse.services.event_store import SqlEventRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.post(
    "", response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    body: EventCreate,
    events: SqlEventRepository = Depends(get_event_repository),
):
    """Create an event from its epoch and signal trigger strings."""
    event = new_event(
        title=body.title,
        amount=body.amount,
        epoch=epochs.parse_epoch(body.epoch),
        signal_trigger=parse_signal_trigger(body.signal_trigger),
        start_datetime=body.start_datetime,
        end_datetime=body.end_datetime,
        tags=body.tags,
        prefix=get_settings().event_id_prefix,
    )
    await events.save(event)
    logger.info("Event created", extra={"entity_id": str(event.id)})
    return event_response(event)


@router.get("", response_model=list[EventResponse])
async def list_events(
    tag: str | None = Query(None),
    events: SqlEventRepository = Depends(get_event_repository),
):
    """List events, optionally only those carrying `tag`."""
    stored = await events.list_all()
    if tag is not None:
        tagged = TagIndex.from_events(stored).identifiers(tag)
        stored = [event for event in stored if event.id in tagged]
    return [event_response(event) for event in stored]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    events: SqlEventRepository = Depends(get_event_repository),
):
    """Get event details."""
    return event_response(await load_event_or_404(event_id, events))


@router.get("/{event_id}/schedule", response_model=ScheduleResponse)
async def get_event_schedule(
    event_id: str,
    at: datetime | None = Query(None),
    events: SqlEventRepository = Depends(get_event_repository),
):
    """Fixed and calendar-exact durations plus the next trigger after `at`."""
    event = await load_event_or_404(event_id, events)
    after = at or datetime.now(timezone.utc)
    if after.tzinfo is None:
        after = after.replace(tzinfo=timezone.utc)
    return ScheduleResponse(
        event_id=event_id,
        fixed_duration_days=event.fixed_duration().days,
        calendar_days=event.days_spanned(),
        frequency=epochs.frequency(event.epoch),
        firing_count=event.firing_count(),
        next_firing=event.next_firing(after),
    )
