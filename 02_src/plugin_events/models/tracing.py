"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """Snapshot of a dispatched PluginEvent, kept for diagnostics."""

    id: str
    tool: str  # bus that dispatched the event
    event_name: str
    source_name: str
    exportable_name: str | None
    description: str  # PluginEvent.describe(), opaque
    trigger_depth: int
    timestamp: datetime
