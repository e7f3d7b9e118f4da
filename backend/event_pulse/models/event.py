"""Event ORM — persists a recurring obligation and its recurrence values.

Invariants:
    - id is the 12-byte identifier (LargeBinary primary key)
    - epoch stored in canonical text form ("3m4x"), re-parsed on load
    - signal trigger split into time-of-day text + interval column
    - instants stored in UTC

Design Decisions:
    - Canonical epoch text over per-variant columns: the grammar is the wire
      contract, so storage reuses it
    - Numeric amount: exact money values, no float drift
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, DateTime, JSON, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column, relationship

from event_pulse.db.base import Base


class EventRecord(Base):
    """Event row — one recurring obligation."""
    __tablename__ = "events"

    id: Mapped[bytes] = mapped_column(LargeBinary(12), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    epoch: Mapped[str] = mapped_column(String(32), nullable=False)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True)
    trigger_time: Mapped[str] = mapped_column(String(8), nullable=False)
    trigger_interval_seconds: Mapped[int] = mapped_column(
        Integer, nullable=False,
    )
    start_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    end_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    notifications: Mapped[list["NotificationRecord"]] = relationship(
        "NotificationRecord", back_populates="event", passive_deletes=True,
    )
