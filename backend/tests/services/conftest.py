"""Service test fixtures — async SQLite DB, seeded wallets and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Notifications captured by RecordingNotificationSink, never sent

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route and
      repository tests (conditional UPDATE and JSON columns behave the same)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from coldflow.api.dependencies import get_notification_sink
from coldflow.db.base import Base
from coldflow.infrastructure.database import get_db, DatabaseSessionManager
from coldflow.models.wallet import WalletModel
import coldflow.infrastructure.database as db_module
from coldflow.main import app
from tests.services.fakes import RecordingNotificationSink


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
def notifier():
    return RecordingNotificationSink()


@pytest.fixture
async def client(test_engine, test_session_factory, notifier):
    """FastAPI test client with DB and notification dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_sink] = lambda: notifier

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


async def _seed_wallet(db, **overrides) -> WalletModel:
    values = {
        "label": "Treasury cold",
        "coin": "btc",
        "wallet_type": "cold",
        "balance_string": "12.0",
        "confirmed_balance_string": "12.0",
        "spendable_balance_string": "10.0",
    }
    values.update(overrides)
    wallet = WalletModel(**values)
    db.add(wallet)
    await db.commit()
    await db.refresh(wallet)
    return wallet


@pytest.fixture
async def seed_cold_wallet(test_db):
    return await _seed_wallet(test_db)


@pytest.fixture
async def seed_hot_wallet(test_db):
    return await _seed_wallet(test_db, label="Exchange hot", wallet_type="hot")
