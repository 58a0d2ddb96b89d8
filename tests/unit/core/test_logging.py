"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
import structlog

from comfy_offload.core import logging as logging_module
from comfy_offload.core.logging import (
    VALID_SOURCES,
    _resolve_log_path,
    get_logger,
    log_with_source,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo root logger and structlog changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    logging_module._logging_config = None
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()
    logging_module._logging_config = None


@pytest.fixture
def logging_config() -> dict:
    return {
        "level": "INFO",
        "format": "json",
        "handlers": {
            "console": {"enabled": True},
            "file": {
                "enabled": True,
                "path": "logs/client.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    }


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_contains_expected_values(self):
        assert VALID_SOURCES == frozenset({"client", "cli", "host", "internal", "unknown"})

    def test_is_frozenset(self):
        assert isinstance(VALID_SOURCES, frozenset)


class TestLoggingConfigLoading:
    """Tests for logging configuration loading from YAML."""

    def test_reads_shipped_logging_yaml(self):
        config = logging_module._load_logging_config()
        assert config["level"] == "INFO"
        assert config["handlers"]["file"]["path"] == "logs/client.jsonl"

    def test_config_is_cached(self):
        with patch("comfy_offload.core.logging.load_yaml_config", return_value={"level": "INFO"}) as loader:
            first = logging_module._load_logging_config()
            second = logging_module._load_logging_config()

        assert first is second
        loader.assert_called_once_with("logging.yaml")

    def test_raises_if_file_missing(self):
        with patch(
            "comfy_offload.core.logging.load_yaml_config",
            side_effect=FileNotFoundError("Configuration file not found: logging.yaml"),
        ):
            with pytest.raises(FileNotFoundError, match="logging.yaml"):
                logging_module._load_logging_config()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_configures_root_logger_level(self, logging_config):
        with patch("comfy_offload.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(level="DEBUG", enable_file_logging=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_uses_config_defaults(self, logging_config):
        with patch("comfy_offload.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(enable_file_logging=False)

        assert logging.getLogger().level == logging.INFO

    def test_console_handler_without_file(self, logging_config):
        with patch("comfy_offload.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(format_type="console", enable_file_logging=False)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["StreamHandler"]

    def test_file_logging_writes_jsonl(self, tmp_path, logging_config):
        log_file = tmp_path / "logs" / "client.jsonl"

        with patch("comfy_offload.core.logging._load_logging_config", return_value=logging_config), \
             patch("comfy_offload.core.logging._resolve_log_path", return_value=log_file):
            setup_logging(level="INFO", enable_console=False, enable_file_logging=True)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["RotatingFileHandler"]

        log_with_source(get_logger("test.file"), "client", "info", "Job queued", job_id="abc123")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert '"job_id": "abc123"' in content
        assert '"source": "client"' in content

    def test_quiets_httpx(self, logging_config):
        with patch("comfy_offload.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(enable_file_logging=False)

        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_structlog_logger(self):
        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_adds_source_field(self):
        logger = get_logger("test")
        mock_info = MagicMock()

        with patch.object(logger, "info", mock_info):
            log_with_source(logger, "client", "info", "Test message", job_id="abc")

        mock_info.assert_called_once_with("Test message", source="client", job_id="abc")

    def test_supports_levels(self):
        logger = get_logger("test")

        for level in ["debug", "info", "warning", "error", "critical"]:
            mock_method = MagicMock()
            with patch.object(logger, level, mock_method):
                log_with_source(logger, "cli", level, f"Test {level}")
            mock_method.assert_called_once()

    def test_raises_on_invalid_level(self):
        with pytest.raises(AttributeError):
            log_with_source(get_logger("test"), "cli", "nonexistent_level", "Test")


class TestResolveLogPath:
    """Tests for _resolve_log_path function."""

    def test_relative_to_project_root(self, tmp_path):
        with patch("comfy_offload.core.logging.find_project_root", return_value=tmp_path):
            assert _resolve_log_path("logs/client.jsonl") == tmp_path / "logs" / "client.jsonl"
