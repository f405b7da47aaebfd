"""GUI widgets for the schedule viewer."""

from .link_bar import LinkBar
from .selection_panel import SelectionPanel

__all__ = ["LinkBar", "SelectionPanel"]
