"""Cross-tool connection module."""

from .tool_connection import IToolConnection, ToolConnection

__all__ = ["IToolConnection", "ToolConnection"]
