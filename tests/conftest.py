"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cashsaver.core.database import Base
from cashsaver.dependencies import get_ledger, get_reminder_scheduler
from cashsaver.main import app
from cashsaver.services.goal_ledger import GoalLedger, GoalStore, SqlAlchemyGoalStore
from cashsaver.services.reminder_service import InMemoryReminderScheduler, ReminderScheduler

# In-memory SQLite; StaticPool keeps every session on one connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Callable clock the ledger reads "now" from; tests move it explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set_day(self, day: date, hour: int = 12) -> None:
        self.now = datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at 2024-01-01 09:00 UTC."""
    return FakeClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def mock_store():
    """Store whose every commit succeeds."""
    store = AsyncMock(spec=GoalStore)
    store.load_goals.return_value = []
    return store


@pytest.fixture
def mock_reminders():
    return AsyncMock(spec=ReminderScheduler)


@pytest.fixture
def ledger(mock_store, mock_reminders, clock) -> GoalLedger:
    """Ledger backed by mocks, for pure accounting tests."""
    return GoalLedger(mock_store, reminders=mock_reminders, clock=clock)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    from cashsaver.models import saving_goal  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def sql_store(session_factory) -> SqlAlchemyGoalStore:
    return SqlAlchemyGoalStore(session_factory)


@pytest.fixture
def reminder_scheduler() -> InMemoryReminderScheduler:
    return InMemoryReminderScheduler()


@pytest_asyncio.fixture
async def sql_ledger(sql_store, reminder_scheduler, clock) -> GoalLedger:
    """Ledger persisting to the in-memory SQLite database."""
    return await GoalLedger.load(sql_store, reminders=reminder_scheduler, clock=clock)


@pytest_asyncio.fixture
async def async_client(sql_ledger, reminder_scheduler) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client wired to the SQLite-backed ledger."""
    app.dependency_overrides[get_ledger] = lambda: sql_ledger
    app.dependency_overrides[get_reminder_scheduler] = lambda: reminder_scheduler

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def sample_goal_data() -> dict:
    """Sample goal payload: 1200 over January 2024."""
    return {
        "title": "New Laptop",
        "target_amount": "1200.00",
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "reminder_enabled": False,
    }
