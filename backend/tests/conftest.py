"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch the real per-user data directory
os.environ.setdefault(
    "EVENT_PULSE_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("EVENT_PULSE_LOG_FORMAT", "text")
