"""Canvas components for diagram display and navigation."""

from .diagram_view import DiagramView

__all__ = ["DiagramView"]
