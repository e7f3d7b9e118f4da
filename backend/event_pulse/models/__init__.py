"""ORM Models — SQLAlchemy declarative models for persisted domain records.

Invariants:
    - All models inherit from Base (db/base.py)
    - Primary keys are the 12 raw identifier bytes, never surrogate integers

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from event_pulse.models.event import EventRecord  # noqa: F401
from event_pulse.models.notification import NotificationRecord  # noqa: F401
