"""Database Infrastructure — SQLAlchemy Base shared by all ORM models.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite driver by default: the store is embedded and single-process
"""
