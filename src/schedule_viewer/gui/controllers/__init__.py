"""Controller layer for GUI actions."""

from .export_controller import ExportController
from .share_controller import ShareController

__all__ = [
    "ExportController",
    "ShareController",
]
