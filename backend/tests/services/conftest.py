"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for the readiness probe, which bypasses get_db

Design Decisions:
    - SQLite in-memory: same engine family as the embedded production store
    - db_manager patched, not re-initialized: reuses the test engine and its tables
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from event_pulse.core.epoch import parse_epoch
from event_pulse.core.event import new_event
from event_pulse.core.signal_trigger import parse_signal_trigger
from event_pulse.db.base import Base
from event_pulse.infrastructure.database import get_db, DatabaseSessionManager
import event_pulse.infrastructure.database as db_module
from event_pulse.main import app
from event_pulse.services.event_store import SqlEventRepository


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_event(test_db):
    """Persist a monthly rent event starting 2024-02-01 UTC."""
    event = new_event(
        title="rent",
        amount=Decimal("1200.00"),
        epoch=parse_epoch("1m"),
        signal_trigger=parse_signal_trigger("M09:00:00::I86400"),
        start_datetime=datetime(2024, 2, 1, tzinfo=timezone.utc),
        tags=["home"],
    )
    await SqlEventRepository(test_db).save(event)
    return event
