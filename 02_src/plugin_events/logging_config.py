"""JSON logging for plugin events, configured from Settings."""

import json
import logging
import logging.config
from datetime import datetime, timezone
from pathlib import Path

from .config import Settings, load_settings
from .models import PluginEvent


class JSONFormatter(logging.Formatter):
    """One JSON object per line; carries the event fields attached by event_extra()."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        event = getattr(record, "event", None)
        if event is not None:
            entry["event"] = event

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def event_context(event: PluginEvent, tool: str | None = None) -> dict:
    """Fields identifying a PluginEvent in a log line."""
    context = {
        "event_name": event.event_name,
        "source_name": event.source_name,
        "exportable_name": event.exportable_name,
        "trigger_depth": event.trigger_depth,
    }
    if tool is not None:
        context["tool"] = tool
    return context


def event_extra(event: PluginEvent, tool: str | None = None) -> dict:
    """`extra=` mapping that JSONFormatter renders under "event"."""
    return {"event": event_context(event, tool)}


def setup_logging(settings: Settings | None = None) -> None:
    """
    Send JSON logs to a rotating file and stdout.

    Args:
        settings: Source of LOG_LEVEL and LOG_FILE. Loaded from the
                  environment when omitted.
    """
    if settings is None:
        settings = load_settings()

    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "plugin_events.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": str(log_path),
                    "maxBytes": 10 * 1024 * 1024,
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": settings.log_level.upper(),
                "handlers": ["file", "console"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
