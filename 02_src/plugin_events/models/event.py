"""Base class for events raised by plugins."""

from abc import ABC, abstractmethod
from typing import Iterator

from .export import lookup_tool_event_name

# Source name given to an event passed in from another tool.
EXTERNAL_SOURCE_NAME = "External Tool"


class InvalidEventError(ValueError):
    """Raised when an event is constructed without a source or event name."""


class PluginEvent(ABC):
    """
    Event generated by a plugin.

    Concrete event kinds subclass PluginEvent and implement details().
    A kind becomes exportable to other tools by declaring a tool event
    name with the @tool_event_name decorator.

    Consumers treat an event as read-only. Only the dispatch and
    forwarding layers call set_source_name() and set_trigger_event(),
    and only before the event is handed to consumers.
    """

    def __init__(self, source_name: str, event_name: str):
        if not isinstance(source_name, str):
            raise InvalidEventError(f"source_name must be a string, got {source_name!r}")
        if not isinstance(event_name, str) or not event_name:
            raise InvalidEventError(f"event_name must be a non-empty string, got {event_name!r}")

        self._event_name = event_name
        self._source_name = source_name
        self._trigger_event: PluginEvent | None = None

    @property
    def event_name(self) -> str:
        """Name of the event kind."""
        return self._event_name

    @property
    def source_name(self) -> str:
        """Name of the plugin immediately responsible for firing this event."""
        return self._source_name

    @property
    def trigger_event(self) -> "PluginEvent | None":
        """Event whose delivery caused this one to be fired, if any."""
        return self._trigger_event

    @property
    def exportable_name(self) -> str | None:
        """Tool event name declared by this event's class, or None."""
        return lookup_tool_event_name(type(self))

    @property
    def is_exportable(self) -> bool:
        """True if this event may be passed to another tool."""
        return self.exportable_name is not None

    @property
    def trigger_depth(self) -> int:
        """Number of events in the trigger chain behind this one."""
        return sum(1 for _ in iter_trigger_chain(self))

    def set_source_name(self, source_name: str) -> None:
        """Re-attribute the event. Reserved for dispatch and forwarding."""
        self._source_name = source_name

    def set_trigger_event(self, trigger_event: "PluginEvent | None") -> None:
        """Record the causal predecessor. The caller must not create a cycle."""
        self._trigger_event = trigger_event

    @abstractmethod
    def details(self) -> str | None:
        """Kind-specific diagnostic text appended to describe(), or None."""
        ...

    def describe(self) -> str:
        """Human-readable rendering for logs and diagnostics."""
        text = f"Event: {self._event_name}  Source: {self._source_name}"
        details = self.details()
        if details is not None:
            text += f"\n\tDetails: {details}"
        return text

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(event_name={self._event_name!r}, "
            f"source_name={self._source_name!r})"
        )


def iter_trigger_chain(event: PluginEvent) -> Iterator[PluginEvent]:
    """Yield the events that led to event, nearest first."""
    current = event.trigger_event
    while current is not None:
        yield current
        current = current.trigger_event
