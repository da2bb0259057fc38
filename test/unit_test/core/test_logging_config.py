"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from unittest.mock import patch

import pytest

from dashitoon.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def _console_handler() -> logging.Handler:
    return next(
        h
        for h in logging.getLogger().handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    )


def _file_handler():
    return next((h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)), None)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("debug", logging.DEBUG),
            ("warning", logging.WARNING),
        ],
    )
    def test_console_handler_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level

    def test_root_logger_level_is_debug(self):
        """Root captures everything; filtering happens at the handlers."""
        setup_logging(log_level="ERROR", enable_file=False)

        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    """Test setup_logging with different formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_console_formatter(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        assert _console_handler().formatter._fmt == expected_format


class TestSetupLoggingFileHandling:
    """Test setup_logging file logging functionality."""

    def test_file_handler_created_when_enabled(self, tmp_path):
        log_dir = tmp_path / "logs"
        with patch("dashitoon.core.logging_config.LOG_FILE_DIR", str(log_dir)), patch(
            "dashitoon.core.logging_config.ENABLE_FILE_LOGGING", True
        ):
            setup_logging(log_level="ERROR", enable_file=True)

        file_handler = _file_handler()
        assert file_handler is not None
        # File handler always logs DEBUG
        assert file_handler.level == logging.DEBUG
        assert (log_dir / "dashitoon.log").exists()

    def test_file_logging_switched_off_by_environment(self, tmp_path):
        with patch("dashitoon.core.logging_config.LOG_FILE_DIR", str(tmp_path)), patch(
            "dashitoon.core.logging_config.ENABLE_FILE_LOGGING", False
        ):
            setup_logging(enable_file=True)

        assert _file_handler() is None

    def test_file_logging_disabled_by_argument(self, tmp_path):
        with patch("dashitoon.core.logging_config.LOG_FILE_DIR", str(tmp_path)), patch(
            "dashitoon.core.logging_config.ENABLE_FILE_LOGGING", True
        ):
            setup_logging(enable_file=False)

        assert _file_handler() is None
        assert not (tmp_path / "dashitoon.log").exists()


class TestSetupLoggingHandlerManagement:
    """Test setup_logging handler management."""

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        assert len(logging.getLogger().handlers) == 1

    def test_existing_handlers_are_removed(self):
        stray = logging.NullHandler()
        logging.getLogger().addHandler(stray)

        setup_logging(enable_file=False)

        assert stray not in logging.getLogger().handlers


class TestSetupLoggingModuleSpecificLevels:
    """Test module-specific log level configuration."""

    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("dashitoon.core", logging.INFO),
            ("dashitoon.core.database", logging.INFO),
            ("dashitoon.services", logging.DEBUG),
            ("dashitoon.moderation", logging.DEBUG),
            ("dashitoon.server", logging.INFO),
            ("dashitoon.server.api", logging.DEBUG),
            ("sqlalchemy", logging.WARNING),
            ("sqlalchemy.engine", logging.WARNING),
            ("httpx", logging.WARNING),
            ("uvicorn.access", logging.INFO),
        ],
    )
    def test_module_specific_log_levels(self, module_name, expected_level):
        setup_logging(enable_file=False)

        assert logging.getLogger(module_name).level == expected_level

    def test_all_module_log_levels_configured(self):
        setup_logging(enable_file=False)

        for module_name, expected_level_str in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == getattr(logging, expected_level_str)


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("dashitoon.services.chapters")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "dashitoon.services.chapters"

    def test_get_logger_returns_same_instance(self):
        assert get_logger("dashitoon.test") is get_logger("dashitoon.test")
