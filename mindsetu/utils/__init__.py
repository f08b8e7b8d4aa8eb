"""Utility modules for the Mind Setu engine."""

from . import clock

__all__ = ["clock"]
