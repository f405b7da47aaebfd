"""Exception hierarchy shared by the engines, the pipeline, and the GUI."""

from __future__ import annotations


class ViewerError(RuntimeError):
    """Base class for recoverable viewer failures carrying a readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CatalogError(ViewerError):
    """Raised when the schedule catalog cannot be enumerated or loaded."""


class GraphGenerationError(ViewerError):
    """Raised by a graph engine for unknown schedules, bad filters, or internal failures."""


class LayoutError(ViewerError):
    """Raised by a layout engine when a graph description cannot be laid out."""


class DisplayError(ViewerError):
    """Raised when diagram markup cannot be materialized on the display surface."""
