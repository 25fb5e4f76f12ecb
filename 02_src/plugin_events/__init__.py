"""Plugin events: identity and routing of events raised by plugins."""

from .config import Settings, load_settings
from .connection import IToolConnection, ToolConnection
from .event_bus import EventHandler, IEventBus, PluginEventBus
from .logging_config import event_context, event_extra, get_logger, setup_logging
from .models import (
    EXTERNAL_SOURCE_NAME,
    InvalidEventError,
    PluginEvent,
    TraceEvent,
    iter_trigger_chain,
    lookup_tool_event_name,
    registered_tool_event_names,
    tool_event_name,
)
from .tool import ITool, Tool
from .tracker import EventTracker, ITracker

__all__ = [
    # Models
    "PluginEvent",
    "InvalidEventError",
    "EXTERNAL_SOURCE_NAME",
    "iter_trigger_chain",
    "tool_event_name",
    "lookup_tool_event_name",
    "registered_tool_event_names",
    "TraceEvent",
    # Components
    "EventHandler",
    "IEventBus",
    "PluginEventBus",
    "IToolConnection",
    "ToolConnection",
    "ITracker",
    "EventTracker",
    "ITool",
    "Tool",
    # Configuration
    "Settings",
    "load_settings",
    "setup_logging",
    "event_context",
    "event_extra",
    "get_logger",
]
