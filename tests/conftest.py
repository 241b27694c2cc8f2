"""Shared test fixtures for pytest"""
import os
from datetime import UTC, datetime

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from feedbuckets.domain.enums import EntryStatus
from feedbuckets.infrastructure.persistence.database import Base, get_db, get_db_transactional
from feedbuckets.infrastructure.persistence.models import Entry, Feed, User
from feedbuckets.main import app
from feedbuckets.presentation.api.dependencies import get_clock
from feedbuckets.shared import timezone

# In-memory SQLite shared by every connection of the test engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Saturday noon UTC, used as "now" wherever a test needs a fixed clock
REFERENCE_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    """Create test database session"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def fixed_clock():
    """Clock pinned to REFERENCE_NOW, localized like timezone.now"""

    def _clock(tz_name: str | None) -> datetime:
        return timezone.convert(tz_name, REFERENCE_NOW)

    return _clock


@pytest.fixture
async def client(test_db, fixed_clock):
    """HTTP client for API testing"""

    async def override_get_db():
        yield test_db

    async def override_get_db_transactional():
        yield test_db
        await test_db.commit()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_transactional] = override_get_db_transactional
    app.dependency_overrides[get_clock] = lambda: fixed_clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_user(test_db):
    """Create test user"""
    user = User(
        id="test-user-id",
        username="reader",
        timezone="UTC",
        entry_order="published_at",
        entry_direction="desc",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def user_headers(test_user):
    """Identity header for the test user"""
    return {"X-User-ID": test_user.id}


@pytest.fixture
async def visible_feed(test_db, test_user):
    """Feed included in aggregate views"""
    feed = Feed(
        id="feed-visible",
        user_id=test_user.id,
        title="Visible Feed",
        feed_url="https://visible.example.com/rss",
        hide_globally=False,
    )
    test_db.add(feed)
    await test_db.commit()
    await test_db.refresh(feed)
    return feed


@pytest.fixture
async def hidden_feed(test_db, test_user):
    """Feed excluded from aggregate views"""
    feed = Feed(
        id="feed-hidden",
        user_id=test_user.id,
        title="Hidden Feed",
        feed_url="https://hidden.example.com/rss",
        hide_globally=True,
    )
    test_db.add(feed)
    await test_db.commit()
    await test_db.refresh(feed)
    return feed


@pytest.fixture
def make_entry(test_db, test_user, visible_feed):
    """Factory persisting an entry for the test user"""
    counter = {"n": 0}

    async def _make_entry(
        published_at: datetime,
        *,
        feed: Feed | None = None,
        status: EntryStatus = EntryStatus.UNREAD,
        entry_id: str | None = None,
    ) -> Entry:
        counter["n"] += 1
        entry = Entry(
            id=entry_id or f"entry-{counter['n']:03d}",
            user_id=test_user.id,
            feed_id=(feed or visible_feed).id,
            title=f"Entry {counter['n']}",
            url=f"https://example.com/entries/{counter['n']}",
            status=status.value,
            published_at=published_at,
        )
        test_db.add(entry)
        await test_db.commit()
        return entry

    return _make_entry
