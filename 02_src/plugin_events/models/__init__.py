"""Core data models for plugin events."""

from .event import (
    EXTERNAL_SOURCE_NAME,
    InvalidEventError,
    PluginEvent,
    iter_trigger_chain,
)
from .export import (
    lookup_tool_event_name,
    registered_tool_event_names,
    tool_event_name,
)
from .tracing import TraceEvent

__all__ = [
    # Events
    "PluginEvent",
    "InvalidEventError",
    "EXTERNAL_SOURCE_NAME",
    "iter_trigger_chain",
    # Export declarations
    "tool_event_name",
    "lookup_tool_event_name",
    "registered_tool_event_names",
    # Tracing
    "TraceEvent",
]
