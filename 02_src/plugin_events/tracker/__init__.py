"""Tracker module."""

from .tracker import EventTracker, ITracker

__all__ = ["EventTracker", "ITracker"]
