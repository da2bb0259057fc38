from typing import AsyncGenerator, Callable, Dict
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.moderation import ModerationAnalysis
from dashitoon.services import ImageStorage


@pytest.fixture
def moderation() -> AsyncMock:
    """Moderation stand-in; tests set ``moderate_review`` results as needed."""
    service = AsyncMock()
    service.moderate_review.return_value = ModerationAnalysis(flagged=False, categories={"harassment": False})
    return service


@pytest.fixture
def image_storage(tmp_path) -> ImageStorage:
    return ImageStorage(tmp_path / "images", max_bytes=64 * 1024)


@pytest.fixture
def as_user() -> Callable[[str], Dict[str, str]]:
    """Build the headers the upstream identity proxy would set for a user."""
    from dashitoon.server.core.config import settings

    def _headers(user_id: str) -> Dict[str, str]:
        return {settings.auth_user_header: user_id}

    return _headers


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, moderation: AsyncMock, image_storage: ImageStorage
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from dashitoon.core.database import get_session
    from dashitoon.server.main import app
    from dashitoon.server.services.deps import get_image_storage, get_moderation_service

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_moderation_service] = lambda: moderation
    app.dependency_overrides[get_image_storage] = lambda: image_storage

    # ASGITransport does not send lifespan events, so no database is created at startup.
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
