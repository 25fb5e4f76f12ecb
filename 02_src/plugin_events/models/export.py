"""Declaration of cross-tool export names for event classes."""

import threading
from typing import Callable, TypeVar

T = TypeVar("T", bound=type)

# Keyed on the exact class. Doubles as the per-type lookup cache.
_tool_event_names: dict[type, str] = {}
_registration_lock = threading.Lock()


def tool_event_name(name: str) -> Callable[[T], T]:
    """
    Class decorator declaring the name under which an event kind may be
    passed to another tool via a ToolConnection.

    Events whose class carries no declaration stay inside the tool that
    raised them. The name may differ from the event's own event_name.

    Args:
        name: Export name, e.g. "TOOL_RENAMED"

    Returns:
        Decorator registering the class and returning it unchanged
    """
    if not isinstance(name, str) or not name:
        raise ValueError("tool event name must be a non-empty string")

    def decorator(event_cls: T) -> T:
        if not isinstance(event_cls, type):
            raise TypeError(f"tool_event_name can only decorate a class, got {event_cls!r}")

        with _registration_lock:
            existing = _tool_event_names.get(event_cls)
            if existing is not None and existing != name:
                raise ValueError(
                    f"{event_cls.__name__} already declares tool event name {existing!r}"
                )
            _tool_event_names[event_cls] = name
        return event_cls

    return decorator


def lookup_tool_event_name(event_cls: type) -> str | None:
    """Return the tool event name declared by event_cls, or None."""
    return _tool_event_names.get(event_cls)


def registered_tool_event_names() -> dict[type, str]:
    """Snapshot of every declared class and its tool event name."""
    with _registration_lock:
        return dict(_tool_event_names)
