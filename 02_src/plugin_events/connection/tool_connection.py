"""ToolConnection passes exportable events from one tool to another."""

import copy
from typing import Protocol

from ..event_bus import IEventBus
from ..logging_config import event_extra, get_logger
from ..models import (
    EXTERNAL_SOURCE_NAME,
    PluginEvent,
    lookup_tool_event_name,
    registered_tool_event_names,
)

logger = get_logger(__name__)


class IToolConnection(Protocol):
    """One-way link from a producer tool to a consumer tool."""

    def get_events(self) -> list[str]:
        """Tool event names the consumer can receive."""
        ...

    def connect(self, tool_event_name: str) -> None:
        """Start forwarding events with this tool event name."""
        ...

    def disconnect(self, tool_event_name: str) -> None:
        """Stop forwarding events with this tool event name."""
        ...

    def is_connected(self, tool_event_name: str) -> bool:
        """Whether events with this tool event name are forwarded."""
        ...


class ToolConnection:
    """Forwards exportable events from a producer bus to a consumer bus."""

    def __init__(self, producer: IEventBus, consumer: IEventBus):
        self._producer = producer
        self._consumer = consumer
        self._connected: set[str] = set()
        self._producer.add_listener(self._forward)

    @property
    def producer(self) -> IEventBus:
        return self._producer

    @property
    def consumer(self) -> IEventBus:
        return self._consumer

    def get_events(self) -> list[str]:
        """Tool event names of the event classes the consumer subscribes to."""
        names = {
            lookup_tool_event_name(event_cls)
            for event_cls in self._consumer.subscribed_event_types()
        }
        names.discard(None)
        return sorted(names)

    def connect(self, tool_event_name: str) -> None:
        """Start forwarding events declared with tool_event_name."""
        if tool_event_name not in registered_tool_event_names().values():
            raise ValueError(f"No event class declares tool event name {tool_event_name!r}")
        self._connected.add(tool_event_name)
        logger.info(
            "Connected %s: %s -> %s",
            tool_event_name,
            self._producer.name,
            self._consumer.name,
        )

    def disconnect(self, tool_event_name: str) -> None:
        """Stop forwarding events declared with tool_event_name."""
        self._connected.discard(tool_event_name)

    def is_connected(self, tool_event_name: str) -> bool:
        """Whether events declared with tool_event_name are forwarded."""
        return tool_event_name in self._connected

    def close(self) -> None:
        """Detach from the producer and drop all connections."""
        self._producer.remove_listener(self._forward)
        self._connected.clear()

    async def _forward(self, event: PluginEvent) -> None:
        """Pass a copy of a connected, exportable event to the consumer."""
        name = event.exportable_name
        if name is None or name not in self._connected:
            return
        # Imported events are not exported again.
        if event.source_name == EXTERNAL_SOURCE_NAME:
            return

        # Producer-side consumers may still hold the original.
        imported = copy.copy(event)
        logger.debug(
            "Forwarding %s from %s to %s",
            name,
            self._producer.name,
            self._consumer.name,
            extra=event_extra(event, self._producer.name),
        )
        await self._consumer.publish(
            imported,
            source_name=EXTERNAL_SOURCE_NAME,
            trigger_event=event,
        )
