from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator, Iterable

import httpx
import pytest
import pytest_asyncio

# Load dotenv files early so test fixtures can read secrets via os.getenv
from dotenv import load_dotenv

TEST_ROOT = Path(__file__).resolve().parent
load_dotenv(TEST_ROOT / ".env", override=False)

# The application settings are read at import time; point them at SQLite first.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from dashitoon.core.database import (  # noqa: E402
    AuditableEntityInterceptor,
    create_all,
    create_engine,
    create_sessionmaker,
    set_audit_user,
)
from dashitoon.core.database.entities import (  # noqa: E402
    Chapter,
    Genre,
    Series,
    User,
    Volume,
)
from dashitoon.core.models.domain.enums import ContentCategory  # noqa: E402

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable time source; call it like ``utc_now``."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://test",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture(name="test_engine")
async def test_engine_fixture():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine, clock) -> AsyncGenerator[AsyncSession, None]:
    """Session with audit stamping driven by the fake clock."""
    async_session = create_sessionmaker(test_engine)
    async with async_session() as session:
        AuditableEntityInterceptor(clock=clock).attach(session)
        yield session


@pytest_asyncio.fixture
async def author(session: AsyncSession) -> User:
    user = User(id="author-1", user_name="author", email="author@example.com")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def reader(session: AsyncSession) -> User:
    user = User(id="reader-1", user_name="reader")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def admin(session: AsyncSession) -> User:
    user = User(id="admin-1", user_name="admin", is_admin=True)
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def genres(session: AsyncSession) -> list[Genre]:
    items = [Genre(name="Fantasy"), Genre(name="Romance")]
    session.add_all(items)
    await session.commit()
    return items


def all_ages_ratings() -> dict[ContentCategory, int]:
    return {category: 0 for category in ContentCategory}


@pytest_asyncio.fixture
async def series(session: AsyncSession, author: User, genres: list[Genre]) -> Series:
    set_audit_user(session, author.id)
    item = Series(title="The Long Tide", synopsis="A ferryman and a drowned city.")
    item.genres = list(genres)
    item.set_category_ratings(all_ages_ratings())
    session.add(item)
    await session.commit()
    return item


@pytest_asyncio.fixture
async def volume(session: AsyncSession, series: Series) -> Volume:
    item = Volume(series_id=series.id, volume_number=1, name="Volume One")
    series.volume_count = 1
    session.add(item)
    await session.commit()
    return item


@pytest_asyncio.fixture
async def chapter(session: AsyncSession, volume: Volume, clock: FakeClock) -> Chapter:
    item = Chapter.create(
        volume_id=volume.id,
        chapter_number=1,
        title="Departure",
        content="<p>The river was low that year.</p>",
        now=clock(),
    )
    volume.chapter_count = 1
    session.add(item)
    await session.commit()
    return item
