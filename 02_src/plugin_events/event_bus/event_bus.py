"""In-process event bus delivering PluginEvents to plugins of one tool."""

import asyncio
from typing import Awaitable, Callable, Protocol

from ..logging_config import event_extra, get_logger
from ..models import PluginEvent

logger = get_logger(__name__)


EventHandler = Callable[[PluginEvent], Awaitable[None]]


class IEventBus(Protocol):
    """Pub/sub for PluginEvents within one tool."""

    name: str

    def subscribe(self, event_cls: type[PluginEvent], handler: EventHandler) -> None:
        """Subscribe a handler to an event class."""
        ...

    def add_listener(self, handler: EventHandler) -> None:
        """Register a handler for every event."""
        ...

    def remove_listener(self, handler: EventHandler) -> None:
        """Remove a handler registered with add_listener()."""
        ...

    def subscribed_event_types(self) -> list[type[PluginEvent]]:
        """Event classes with at least one subscriber."""
        ...

    async def publish(
        self,
        event: PluginEvent,
        source_name: str | None = None,
        trigger_event: PluginEvent | None = None,
    ) -> None:
        """Finalize attribution, then call subscribers and listeners."""
        ...


class PluginEventBus:
    """In-memory pub/sub event bus for one tool."""

    def __init__(self, name: str = "tool"):
        self.name = name
        self._subscribers: dict[type[PluginEvent], list[EventHandler]] = {}
        self._listeners: list[EventHandler] = []

    def subscribe(self, event_cls: type[PluginEvent], handler: EventHandler) -> None:
        """Subscribe a handler to an event class (exact class match)."""
        self._subscribers.setdefault(event_cls, []).append(handler)

    def unsubscribe(self, event_cls: type[PluginEvent], handler: EventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._subscribers.get(event_cls)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._subscribers[event_cls]

    def add_listener(self, handler: EventHandler) -> None:
        """Register a handler for every event."""
        self._listeners.append(handler)

    def remove_listener(self, handler: EventHandler) -> None:
        """Remove a handler registered with add_listener()."""
        if handler in self._listeners:
            self._listeners.remove(handler)

    def subscribed_event_types(self) -> list[type[PluginEvent]]:
        """Event classes with at least one subscriber."""
        return list(self._subscribers)

    async def publish(
        self,
        event: PluginEvent,
        source_name: str | None = None,
        trigger_event: PluginEvent | None = None,
    ) -> None:
        """
        Publish an event to its subscribers and to all listeners.

        Args:
            event: Event to deliver
            source_name: If given, re-attributes the event before delivery
            trigger_event: If given, links the event that caused this one
        """
        if source_name is not None:
            event.set_source_name(source_name)
        if trigger_event is not None:
            event.set_trigger_event(trigger_event)

        handlers = [*self._subscribers.get(type(event), []), *self._listeners]
        logger.debug(
            "Publishing %s on %s to %d handler(s)",
            event.event_name,
            self.name,
            len(handlers),
        )

        if handlers:
            results = await asyncio.gather(
                *[handler(event) for handler in handlers],
                return_exceptions=True,
            )

            for i, result in enumerate(results):
                if isinstance(result, BaseException):
                    logger.error(
                        "Error in handler %s for %s: %r",
                        i,
                        event.event_name,
                        result,
                        extra=event_extra(event, self.name),
                    )

    async def rebroadcast(
        self,
        event: PluginEvent,
        trigger_event: PluginEvent,
        source_name: str,
    ) -> None:
        """Publish an event fired in reaction to trigger_event by source_name."""
        await self.publish(event, source_name=source_name, trigger_event=trigger_event)
