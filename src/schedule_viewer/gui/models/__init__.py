"""Data models for the GUI application."""

from .selection import SelectionModel

__all__ = ["SelectionModel"]
