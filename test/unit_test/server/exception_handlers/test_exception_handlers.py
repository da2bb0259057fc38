"""
Unit tests for server exception handlers.

Tests cover the mapping of application errors to HTTP responses and the
global fallback for unhandled exceptions.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from dashitoon.core.errors import (
    ChapterVersionInUseError,
    ForbiddenAccessError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from dashitoon.moderation import ModerationError
from dashitoon.server.exception_handlers import setup_exception_handlers
from dashitoon.server.exception_handlers.global_handler import global_exception_handler


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    async def test_logs_error_with_context(self, mock_request):
        exc = ValueError("Test error")

        with patch("dashitoon.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"

    async def test_returns_500_with_error_id(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("dashitoon.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["detail"] == "Internal server error"
        assert body["error_id"] == id(exc)
        assert body["error_type"] == "RuntimeError"


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise exc

    @app.get("/typed/{item_id}")
    async def typed(item_id: int):
        return {"item_id": item_id}

    return app


class TestApplicationErrorMapping:
    """Application errors are translated to status codes by setup_exception_handlers."""

    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (NotFoundError("7", "Series"), 404),
            (ForbiddenAccessError(), 403),
            (UnauthorizedError(), 401),
            (ValidationError("bad", errors={"title": ["Required."]}), 400),
            (ChapterVersionInUseError("abc", "current"), 400),
            (ModerationError("upstream down", status_code=503), 502),
        ],
    )
    async def test_status_codes(self, exc, status_code):
        transport = ASGITransport(app=_app_raising(exc))
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            response = await client.get("/boom")

        assert response.status_code == status_code
        body = response.json()
        assert body["error_type"] == type(exc).__name__
        assert body["detail"] == str(exc)

    async def test_validation_errors_are_included(self):
        exc = ValidationError("bad", errors={"title": ["Required."]})
        transport = ASGITransport(app=_app_raising(exc))
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            response = await client.get("/boom")

        assert response.json()["errors"] == {"title": ["Required."]}

    async def test_request_validation_is_400(self):
        transport = ASGITransport(app=_app_raising(RuntimeError()))
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            response = await client.get("/typed/not-a-number")

        assert response.status_code == 400
        assert "item_id" in response.json()["errors"]

    async def test_unhandled_is_500(self):
        transport = ASGITransport(app=_app_raising(RuntimeError("boom")), raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error_type"] == "RuntimeError"
