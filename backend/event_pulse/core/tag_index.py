"""Tag Index — in-memory multimap from entity identifier to tag labels.

Invariants:
    - labels(id) and identifiers(label) are always mutually consistent
    - Empty label sets are dropped, never stored
    - Returned sets are copies: callers cannot mutate the index through them

Design Decisions:
    - Not internally synchronized: concurrent writers serialize externally
"""

from collections import defaultdict
from collections.abc import Iterable

from event_pulse.core.event import Event
from event_pulse.core.identifier import Identifier


class TagIndex:
    """Bidirectional identifier <-> label bookkeeping."""

    def __init__(self):
        self._labels: dict[Identifier, set[str]] = defaultdict(set)
        self._owners: dict[str, set[Identifier]] = defaultdict(set)

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "TagIndex":
        """Index every tag carried by `events`."""
        index = cls()
        for event in events:
            for tag in event.tags or ():
                index.add(event.id, tag)
        return index

    def add(self, identifier: Identifier, label: str) -> None:
        self._labels[identifier].add(label)
        self._owners[label].add(identifier)

    def discard(self, identifier: Identifier, label: str) -> None:
        self._labels.get(identifier, set()).discard(label)
        self._owners.get(label, set()).discard(identifier)
        if not self._labels.get(identifier, True):
            del self._labels[identifier]
        if not self._owners.get(label, True):
            del self._owners[label]

    def clear(self, identifier: Identifier) -> None:
        for label in self.labels(identifier):
            self.discard(identifier, label)

    def labels(self, identifier: Identifier) -> set[str]:
        return set(self._labels.get(identifier, ()))

    def identifiers(self, label: str) -> set[Identifier]:
        return set(self._owners.get(label, ()))

    def __len__(self) -> int:
        return len(self._labels)
