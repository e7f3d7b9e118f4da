"""Notification ORM — persists an EventNotify and its delivery schedule.

Invariants:
    - Always belongs to an Event (event_id FK)
    - delivery_frequency holds a SendFrequency value
    - start_date is the CURRENT rescheduled start, overwritten on every edit

Design Decisions:
    - Recipients as JSON list of ids: small, always loaded with the row
    - event loaded eagerly (selectin): an EventNotify is never used without its event
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON, LargeBinary, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from event_pulse.db.base import Base


class NotificationRecord(Base):
    """Notification row — delivery settings for one event."""
    __tablename__ = "event_notifications"

    id: Mapped[bytes] = mapped_column(LargeBinary(12), primary_key=True)
    event_id: Mapped[bytes] = mapped_column(
        LargeBinary(12), ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    delivery_kind: Mapped[str] = mapped_column(String(32), nullable=False)
    delivery_recipient: Mapped[str] = mapped_column(
        String(255), nullable=False,
    )
    delivery_frequency: Mapped[str] = mapped_column(
        String(20), nullable=False,
    )
    recipients: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notify_time: Mapped[str] = mapped_column(String(8), nullable=False)
    notify_interval_seconds: Mapped[int] = mapped_column(
        Integer, nullable=False,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    event: Mapped["EventRecord"] = relationship(
        "EventRecord", back_populates="notifications", lazy="selectin",
    )
