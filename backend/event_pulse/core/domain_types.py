"""Domain Types — enums and calendar constants shared across the core.

Invariants:
    - All valid states encoded as Enums — no raw string matching
    - Fixed-length approximations (30-day month, 365-day year) live here and nowhere else

Design Decisions:
    - str Enums: serialize to JSON and DB columns without custom encoders
    - Constants as module-level ints: used by both fixed and calendar-exact arithmetic
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

IntervalSeconds = NewType("IntervalSeconds", int)     # >= 0
RecipientAddress = NewType("RecipientAddress", str)   # email, phone, handle


# ─── Calendar Constants ──────────────────────────────────────────

DAYS_IN_WEEK = 7
DAYS_IN_MONTH = 30      # approximation
DAYS_IN_YEAR = 365      # approximation
MONTHS_IN_YEAR = 12

SECS_IN_DAY = 24 * 60 * 60
SECS_IN_WEEK = DAYS_IN_WEEK * SECS_IN_DAY
SECS_IN_BI_WEEKLY = 2 * SECS_IN_WEEK
SECS_IN_MONTH = DAYS_IN_MONTH * SECS_IN_DAY
SECS_IN_QUARTER = 3 * SECS_IN_MONTH


# ─── Enums ───────────────────────────────────────────────────────

class EpochUnit(str, Enum):
    """Unit letters accepted by the epoch grammar."""
    YEAR = "y"
    MONTH = "m"
    WEEK = "w"
    DAY = "d"


class SendFrequency(str, Enum):
    """How often a notification is re-delivered — drives rescheduling offsets."""
    ON_TRIGGER = "on_trigger"
    DAY_PRIOR = "day_prior"
    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class TransportKind(str, Enum):
    """Delivery channels a notification can be routed through."""
    EMAIL = "email"
    SMS = "sms"
    PUSH_NOTIFICATION = "push_notification"
    SLACK = "slack"
    DISCORD = "discord"
    TELEGRAM = "telegram"
