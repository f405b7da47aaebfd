"""Diagram export controller."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QMessageBox, QWidget

from ...exporters import DiagramExporter, diagram_file_name


logger = logging.getLogger(__name__)


class ExportController:
    """Manages opening and saving the rendered diagram."""

    def __init__(self, parent: QWidget, exporter: DiagramExporter):
        self.parent = parent
        self.exporter = exporter

    def open_in_new_tab(self) -> Optional[Path]:
        """Open the diagram in the system viewer; best effort, silent on failure."""
        return self.exporter.open_in_new_tab()

    def save_dialog(self) -> Optional[Path]:
        """Ask for a destination and save the diagram, return path or None."""
        diagram = self.exporter.diagram
        if diagram is None:
            return None

        file_path, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Save Diagram",
            diagram_file_name(diagram),
            "SVG Files (*.svg);;DOT Files (*.dot *.gv)",
        )
        if not file_path:
            return None

        try:
            return self.exporter.save(Path(file_path))
        except OSError as exc:
            logger.exception("Failed to save diagram to %s", file_path)
            QMessageBox.critical(
                self.parent,
                "Save Diagram",
                f"Failed to save diagram: {exc}",
            )
            return None
