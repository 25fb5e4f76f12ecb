"""Tracker implementation for recording dispatched events."""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Protocol

from ..config import DEFAULT_TRACE_BUFFER_SIZE, Settings
from ..event_bus import IEventBus
from ..logging_config import event_extra, get_logger
from ..models import PluginEvent, TraceEvent

logger = get_logger(__name__)


class ITracker(Protocol):
    """Records TraceEvents for events seen on a bus."""

    async def track(self, event: PluginEvent) -> None:
        """Create a TraceEvent for event and log it."""
        ...

    def get_trace(self, limit: int | None = None) -> list[TraceEvent]:
        """Return recorded TraceEvents, oldest first."""
        ...


class EventTracker:
    """Listens to a bus and keeps a bounded trace of what it dispatched."""

    def __init__(self, event_bus: IEventBus, max_events: int = DEFAULT_TRACE_BUFFER_SIZE):
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._event_bus = event_bus
        self._trace: deque[TraceEvent] = deque(maxlen=max_events)

    @classmethod
    def from_settings(cls, event_bus: IEventBus, settings: Settings) -> "EventTracker":
        """Create a tracker holding settings.trace_buffer_size events."""
        return cls(event_bus, max_events=settings.trace_buffer_size)

    @property
    def max_events(self) -> int:
        return self._trace.maxlen

    async def start(self) -> None:
        """Listen to every event on the bus."""
        self._event_bus.add_listener(self.track)

    async def stop(self) -> None:
        """Stop listening."""
        self._event_bus.remove_listener(self.track)

    async def track(self, event: PluginEvent) -> None:
        """Create a TraceEvent for event and log it."""
        description = event.describe()
        trace_event = TraceEvent(
            id=str(uuid.uuid4()),
            tool=self._event_bus.name,
            event_name=event.event_name,
            source_name=event.source_name,
            exportable_name=event.exportable_name,
            description=description,
            trigger_depth=event.trigger_depth,
            timestamp=datetime.now(timezone.utc),
        )
        self._trace.append(trace_event)
        logger.debug(description, extra=event_extra(event, trace_event.tool))

    def get_trace(self, limit: int | None = None) -> list[TraceEvent]:
        """Return recorded TraceEvents, oldest first; limit keeps the newest."""
        events = list(self._trace)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def clear(self) -> None:
        """Forget all recorded TraceEvents."""
        self._trace.clear()
