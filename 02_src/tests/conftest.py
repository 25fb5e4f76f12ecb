"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def event_bus():
    """Create an EventBus for a single tool."""
    from plugin_events.event_bus import PluginEventBus

    return PluginEventBus(name="CodeBrowser")


@pytest.fixture
def other_bus():
    """Create an EventBus for a second tool."""
    from plugin_events.event_bus import PluginEventBus

    return PluginEventBus(name="VersionTracking")


@pytest.fixture
def connection(event_bus, other_bus):
    """Create a ToolConnection from event_bus to other_bus."""
    from plugin_events.connection import ToolConnection

    conn = ToolConnection(event_bus, other_bus)
    yield conn
    conn.close()


@pytest_asyncio.fixture
async def tracker(event_bus):
    """Create an EventTracker listening to event_bus."""
    from plugin_events.tracker import EventTracker

    tr = EventTracker(event_bus, max_events=10)
    await tr.start()
    yield tr
    await tr.stop()


@pytest.fixture
def isolated_registry():
    """Restore the tool event name registry after a test declares throwaway classes."""
    from plugin_events.models import export

    saved = dict(export._tool_event_names)
    yield
    with export._registration_lock:
        export._tool_event_names.clear()
        export._tool_event_names.update(saved)
