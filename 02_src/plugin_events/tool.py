"""Tool bootstrap: one host instance with its bus, tracker and connections."""

from typing import Protocol

from .config import Settings, load_settings
from .connection import ToolConnection
from .event_bus import PluginEventBus
from .logging_config import get_logger, setup_logging
from .tracker import EventTracker

logger = get_logger(__name__)


class ITool(Protocol):
    """Lifecycle of one tool."""

    async def start(self) -> None:
        """Start components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...


class Tool:
    """A host instance whose plugins share one event bus."""

    def __init__(
        self,
        name: str,
        settings: Settings | None = None,
        configure_logging: bool = False,
    ):
        self.name = name
        self._settings = settings if settings is not None else load_settings()
        self._configure_logging = configure_logging

        self.event_bus = PluginEventBus(name=name)
        self.tracker = EventTracker.from_settings(self.event_bus, self._settings)
        self._connections: list[ToolConnection] = []

    @property
    def settings(self) -> Settings:
        return self._settings

    async def start(self) -> None:
        """Configure logging if requested, then start tracing."""
        if self._configure_logging:
            setup_logging(self._settings)
        await self.tracker.start()
        logger.info("Tool %s started (trace buffer %d)", self.name, self.tracker.max_events)

    async def stop(self) -> None:
        """Close connections, then stop tracing."""
        for connection in self._connections:
            connection.close()
        self._connections.clear()
        await self.tracker.stop()
        logger.info("Tool %s stopped", self.name)

    def connect_to(self, other: "Tool", *tool_event_names: str) -> ToolConnection:
        """Forward the named exportable events from this tool to other."""
        connection = ToolConnection(self.event_bus, other.event_bus)
        for tool_event_name in tool_event_names:
            connection.connect(tool_event_name)
        self._connections.append(connection)
        return connection
