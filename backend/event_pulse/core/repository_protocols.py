"""Boundary Protocols — contracts between core and the storage shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Storage is consumed only through save/get; no transactional semantics assumed

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that
      produce the records are never async themselves
"""

from typing import Protocol

from event_pulse.core.event import Event
from event_pulse.core.identifier import Identifier
from event_pulse.core.notify import EventNotify


class EventRepository(Protocol):
    """Contract for event persistence — implemented by shell."""
    async def save(self, event: Event) -> Identifier: ...
    async def get(self, event_id: Identifier) -> Event | None: ...
    async def list_all(self) -> list[Event]: ...


class NotificationRepository(Protocol):
    """Contract for notification persistence — implemented by shell."""
    async def save(self, notification: EventNotify) -> Identifier: ...
    async def get(self, notify_id: Identifier) -> EventNotify | None: ...
