"""
Tests for the logging module.

Tests verify:
- configure_logging validates the level and renders events
- configure_from_settings honours debug and log_format
- get_logger returns a usable structlog logger
"""

import json
import logging

import pytest
import structlog

from fallback.errors import InvalidConfigError
from fallback.logging import configure_from_settings, configure_logging, get_logger
from fallback.settings import FallbackSettings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_unknown_level_rejected(self):
        """An unknown level name raises InvalidConfigError."""
        with pytest.raises(InvalidConfigError) as exc_info:
            configure_logging(level="LOUD")
        assert exc_info.value.key == "log_level"

    def test_level_case_insensitive(self, restore_root_logger):
        """Level names are case-insensitive."""
        configure_logging(level="warning", json_format=True)
        assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(
            logging.WARNING
        )

    def test_json_renderer(self, restore_root_logger):
        """json_format=True ends the chain with a JSONRenderer."""
        configure_logging(level="INFO", json_format=True)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self, restore_root_logger):
        """json_format=False ends the chain with a ConsoleRenderer."""
        configure_logging(level="INFO", json_format=False)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_service_metadata_in_json(self, restore_root_logger, capsys):
        """JSON events carry the service name and logger name."""
        root = logging.getLogger()
        root.handlers[:] = []
        configure_logging(level="INFO", json_format=True, service="layered-config")
        get_logger("fallback.test").info("pair.resolved", slot="secondary")
        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "pair.resolved"
        assert payload["service.name"] == "layered-config"
        assert payload["logger"] == "fallback.test"
        assert payload["slot"] == "secondary"
        assert "timestamp" in payload

    def test_timestamp_optional(self, restore_root_logger):
        """add_timestamp=False leaves the TimeStamper out of the chain."""
        configure_logging(level="INFO", json_format=True, add_timestamp=False)
        processors = structlog.get_config()["processors"]
        assert not any(isinstance(p, structlog.processors.TimeStamper) for p in processors)
        assert processors[0] is structlog.stdlib.add_log_level


class TestConfigureFromSettings:
    """Test configure_from_settings."""

    def test_debug_setting(self, restore_root_logger):
        """debug=True configures DEBUG filtering."""
        configure_from_settings(FallbackSettings(debug=True, log_format="json"))
        assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(
            logging.DEBUG
        )

    def test_format_setting(self, restore_root_logger):
        """log_format=json selects the JSON renderer."""
        configure_from_settings(FallbackSettings(log_format="json"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestGetLogger:
    """Test get_logger."""

    def test_logger_emits_events(self):
        """Loggers from get_logger are captured by structlog testing."""
        with structlog.testing.capture_logs() as logs:
            get_logger(__name__).info("something.happened", count=2)
        assert len(logs) == 1
        assert logs[0]["event"] == "something.happened"
        assert logs[0]["count"] == 2
        assert logs[0]["log_level"] == "info"
