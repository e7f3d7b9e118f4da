"""Initial schema — events, event_notifications.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.LargeBinary(12), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("amount", sa.Numeric(18, 4), nullable=False),
        sa.Column("epoch", sa.String(32), nullable=False),
        sa.Column("tags", sa.JSON, nullable=True),
        sa.Column("trigger_time", sa.String(8), nullable=False),
        sa.Column("trigger_interval_seconds", sa.Integer, nullable=False),
        sa.Column("start_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "event_notifications",
        sa.Column("id", sa.LargeBinary(12), primary_key=True),
        sa.Column(
            "event_id", sa.LargeBinary(12),
            sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("delivery_kind", sa.String(32), nullable=False),
        sa.Column("delivery_recipient", sa.String(255), nullable=False),
        sa.Column("delivery_frequency", sa.String(20), nullable=False),
        sa.Column("recipients", sa.JSON, nullable=False),
        sa.Column("notify_time", sa.String(8), nullable=False),
        sa.Column("notify_interval_seconds", sa.Integer, nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_event_notifications_event_id", "event_notifications", ["event_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_event_notifications_event_id", "event_notifications")
    op.drop_table("event_notifications")
    op.drop_table("events")
