"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Environment variable parsing
- Logfire initialization with various configurations
- Request and moderation logging helpers
"""

import importlib
import os
from unittest.mock import MagicMock, patch

import pytest

import dashitoon.core.monitoring as monitoring_module


@pytest.fixture
def reload_monitoring():
    """Reload the module under a patched environment and restore it afterwards."""

    def _reload(env: dict, clear: bool = False):
        with patch.dict(os.environ, env, clear=clear):
            return importlib.reload(monitoring_module)

    yield _reload
    importlib.reload(monitoring_module)


@pytest.fixture
def initialized():
    with patch.object(monitoring_module, "_initialized", True):
        yield


class TestLogfireEnvironmentConfiguration:
    """Test environment variable configuration for Logfire."""

    def test_disabled_by_default(self, reload_monitoring):
        module = reload_monitoring({}, clear=True)

        assert module.LOGFIRE_ENABLED is False
        assert module.LOGFIRE_SERVICE_NAME == "dashitoon-api"
        assert module.LOGFIRE_ENVIRONMENT == "development"

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("YES", True), ("no", False), ("", False)])
    def test_enabled_flag_parsing(self, reload_monitoring, value, expected):
        module = reload_monitoring({"LOGFIRE_ENABLED": value})

        assert module.LOGFIRE_ENABLED is expected

    def test_values_from_environment(self, reload_monitoring):
        module = reload_monitoring(
            {"LOGFIRE_TOKEN": "tok-123", "LOGFIRE_SERVICE_NAME": "dashitoon-worker", "LOGFIRE_ENVIRONMENT": "prod"}
        )

        assert module.LOGFIRE_TOKEN == "tok-123"
        assert module.LOGFIRE_SERVICE_NAME == "dashitoon-worker"
        assert module.LOGFIRE_ENVIRONMENT == "prod"

    @pytest.mark.parametrize(
        "flag", ["LOGFIRE_TRACE_SQLALCHEMY", "LOGFIRE_TRACE_HTTPX", "LOGFIRE_TRACE_FASTAPI"]
    )
    def test_trace_flags_default_on_and_can_be_disabled(self, reload_monitoring, flag):
        assert getattr(reload_monitoring({}, clear=True), flag) is True
        assert getattr(reload_monitoring({flag: "false"}), flag) is False


class TestInitializeLogfire:
    """Test initialize_logfire under different configurations."""

    def test_disabled(self):
        with patch.object(monitoring_module, "LOGFIRE_ENABLED", False), patch.object(
            monitoring_module, "logfire"
        ) as logfire_mock:
            assert monitoring_module.initialize_logfire() is False

        logfire_mock.configure.assert_not_called()

    def test_enabled_without_token(self):
        with patch.object(monitoring_module, "LOGFIRE_ENABLED", True), patch.object(
            monitoring_module, "LOGFIRE_TOKEN", ""
        ), patch.object(monitoring_module, "logfire") as logfire_mock:
            assert monitoring_module.initialize_logfire() is False

        logfire_mock.configure.assert_not_called()

    def test_enabled_with_token_instruments_everything(self):
        app = MagicMock()
        with patch.object(monitoring_module, "LOGFIRE_ENABLED", True), patch.object(
            monitoring_module, "LOGFIRE_TOKEN", "tok-123"
        ), patch.object(monitoring_module, "_initialized", False), patch.object(
            monitoring_module, "logfire"
        ) as logfire_mock:
            assert monitoring_module.initialize_logfire(app) is True
            assert monitoring_module._initialized is True

        logfire_mock.configure.assert_called_once()
        assert logfire_mock.configure.call_args.kwargs["token"] == "tok-123"
        logfire_mock.instrument_sqlalchemy.assert_called_once()
        logfire_mock.instrument_httpx.assert_called_once()
        logfire_mock.instrument_fastapi.assert_called_once_with(app=app)

    def test_feature_flags_skip_instrumentation(self):
        with patch.object(monitoring_module, "LOGFIRE_ENABLED", True), patch.object(
            monitoring_module, "LOGFIRE_TOKEN", "tok-123"
        ), patch.object(monitoring_module, "LOGFIRE_TRACE_SQLALCHEMY", False), patch.object(
            monitoring_module, "LOGFIRE_TRACE_HTTPX", False
        ), patch.object(monitoring_module, "_initialized", False), patch.object(
            monitoring_module, "logfire"
        ) as logfire_mock:
            # No app given, so FastAPI is not instrumented either
            assert monitoring_module.initialize_logfire() is True

        logfire_mock.instrument_sqlalchemy.assert_not_called()
        logfire_mock.instrument_httpx.assert_not_called()
        logfire_mock.instrument_fastapi.assert_not_called()


class TestLoggingHelpers:
    """Test the request and moderation logging helpers."""

    def test_api_request_skipped_when_not_initialized(self):
        with patch.object(monitoring_module, "_initialized", False), patch.object(
            monitoring_module, "logfire"
        ) as logfire_mock:
            monitoring_module.log_api_request("GET", "/health", 200, 1.5)

        logfire_mock.info.assert_not_called()

    def test_api_request_reported(self, initialized):
        with patch.object(monitoring_module, "logfire") as logfire_mock:
            monitoring_module.log_api_request("POST", "/api/v1/series", 201, 12.0)

        logfire_mock.info.assert_called_once_with(
            "API request", method="POST", path="/api/v1/series", status_code=201, duration_ms=12.0
        )

    def test_moderation_result_reported(self, initialized):
        with patch.object(monitoring_module, "logfire") as logfire_mock:
            monitoring_module.log_moderation_result("42", True, ["harassment"])

        logfire_mock.info.assert_called_once_with(
            "Review moderated", review_id="42", flagged=True, categories=["harassment"]
        )

    def test_moderation_result_defaults_categories(self, initialized):
        with patch.object(monitoring_module, "logfire") as logfire_mock:
            monitoring_module.log_moderation_result("7", False)

        assert logfire_mock.info.call_args.kwargs["categories"] == []
