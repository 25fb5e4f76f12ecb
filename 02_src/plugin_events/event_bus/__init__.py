"""EventBus module."""

from .event_bus import EventHandler, IEventBus, PluginEventBus

__all__ = ["EventHandler", "IEventBus", "PluginEventBus"]
