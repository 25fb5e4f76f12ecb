"""Tests for configuration and logging setup."""

import json
import logging

import pytest

from plugin_events.config import (
    DEFAULT_LOG_PATH,
    DEFAULT_TRACE_BUFFER_SIZE,
    PROJECT_ROOT,
    Settings,
    load_settings,
    resolve_log_path,
)
from plugin_events.logging_config import (
    JSONFormatter,
    event_context,
    event_extra,
    get_logger,
    setup_logging,
)
from sample_events import LocationEvent, RenameEvent


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear config variables and point .env loading at an empty file."""
    for name in ("LOG_LEVEL", "LOG_FILE", "TRACE_BUFFER_SIZE"):
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return env_file


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults(self, clean_env):
        """Test defaults when nothing is configured."""
        settings = load_settings(clean_env)
        assert settings.log_level == "INFO"
        assert settings.log_file == DEFAULT_LOG_PATH
        assert settings.trace_buffer_size == DEFAULT_TRACE_BUFFER_SIZE

    def test_from_environment(self, clean_env, monkeypatch, tmp_path):
        """Test reading values from the environment."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "events.log"))
        monkeypatch.setenv("TRACE_BUFFER_SIZE", "25")

        settings = load_settings(clean_env)

        assert settings.log_level == "DEBUG"
        assert settings.log_file == tmp_path / "events.log"
        assert settings.trace_buffer_size == 25

    def test_from_env_file(self, clean_env, monkeypatch):
        """Test reading values from a .env file."""
        clean_env.write_text("TRACE_BUFFER_SIZE=42\n")
        # Registers the variable so load_dotenv's write is undone afterwards
        monkeypatch.setenv("TRACE_BUFFER_SIZE", "1")
        monkeypatch.delenv("TRACE_BUFFER_SIZE")

        settings = load_settings(clean_env)

        assert settings.trace_buffer_size == 42

    @pytest.mark.parametrize("value", ["many", "0", "-3"])
    def test_invalid_trace_buffer_size(self, clean_env, monkeypatch, value):
        """Test that a bad buffer size is rejected."""
        monkeypatch.setenv("TRACE_BUFFER_SIZE", value)
        with pytest.raises(ValueError):
            load_settings(clean_env)


class TestResolveLogPath:
    """Tests for resolve_log_path()."""

    def test_default(self):
        assert resolve_log_path(None) == DEFAULT_LOG_PATH

    def test_relative(self):
        assert resolve_log_path("logs/a.log") == PROJECT_ROOT / "logs" / "a.log"

    def test_absolute(self, tmp_path):
        assert resolve_log_path(tmp_path / "a.log") == tmp_path / "a.log"


@pytest.fixture
def restore_root_logger():
    """Undo the handlers and level that setup_logging() installs."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _flush(root: logging.Logger) -> None:
    for handler in root.handlers:
        handler.flush()


class TestLogging:
    """Tests for structured logging."""

    def test_json_formatter_includes_event(self):
        """Test that event fields attached with event_extra() are serialized."""
        event = LocationEvent("Listing", 0x10)
        record = logging.LogRecord(
            name="plugin_events.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Publishing %s",
            args=("LocationEvent",),
            exc_info=None,
        )
        for key, value in event_extra(event, "CodeBrowser").items():
            setattr(record, key, value)

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "plugin_events.test"
        assert data["message"] == "Publishing LocationEvent"
        assert data["event"] == {
            "event_name": "LocationEvent",
            "source_name": "Listing",
            "exportable_name": "PROGRAM_LOCATION",
            "trigger_depth": 0,
            "tool": "CodeBrowser",
        }

    def test_json_formatter_without_event(self):
        """Test that plain records carry no event field."""
        record = logging.LogRecord(
            name="plugin_events.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="plain",
            args=(),
            exc_info=None,
        )
        assert "event" not in json.loads(JSONFormatter().format(record))

    def test_event_context_without_tool(self):
        """Test that the tool field is optional."""
        assert "tool" not in event_context(RenameEvent("Explorer"))

    def test_setup_logging_uses_settings(self, tmp_path, restore_root_logger):
        """Test that LOG_FILE and LOG_LEVEL from Settings drive the handlers."""
        log_file = tmp_path / "logs" / "events.log"
        settings = Settings(log_level="WARNING", log_file=log_file)

        setup_logging(settings)
        get_logger("plugin_events.test").info("quiet")
        get_logger("plugin_events.test").warning(
            "renamed", extra=event_extra(RenameEvent("Explorer"), "CodeBrowser")
        )
        _flush(restore_root_logger)

        assert restore_root_logger.level == logging.WARNING
        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["message"] == "renamed"
        assert entry["event"]["exportable_name"] == "TOOL_RENAMED"

    def test_setup_logging_loads_settings(self, clean_env, monkeypatch, tmp_path, restore_root_logger):
        """Test that setup_logging() reads the environment when no Settings are given."""
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("LOG_FILE", str(log_file))
        monkeypatch.setenv("LOG_LEVEL", "debug")

        setup_logging()
        get_logger("plugin_events.test").debug("hello")
        _flush(restore_root_logger)

        assert restore_root_logger.level == logging.DEBUG
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["message"] == "hello"
