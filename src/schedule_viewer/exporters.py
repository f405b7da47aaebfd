"""
Export helpers for rendered diagrams.

Provides opening the last rendered diagram as a standalone document in the
system browser, and writing the diagram markup or its DOT source to disk.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from PySide6.QtCore import QTimer, QUrl
from PySide6.QtGui import QDesktopServices

from .pipeline import RegenerationPipeline, RenderedDiagram


logger = logging.getLogger(__name__)

Opener = Callable[[Path], bool]
Scheduler = Callable[[int, Callable[[], None]], None]

SOURCE_SUFFIXES = (".dot", ".gv")


def open_with_desktop(path: Path) -> bool:
    return QDesktopServices.openUrl(QUrl.fromLocalFile(str(path)))


def schedule_with_timer(delay_ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(delay_ms, callback)


def _sanitize_name(name: str) -> str:
    safe = "".join(ch if ch.isalnum() or ch in ("-", "_") else "_" for ch in name.strip())
    return safe or "schedule"


def diagram_file_name(diagram: RenderedDiagram, suffix: str = ".svg") -> str:
    """Filesystem-friendly default name, e.g. ``Update.svg`` or ``Render_render.svg``."""
    name = _sanitize_name(diagram.selection.schedule_name)
    if diagram.selection.render_app:
        name = f"{name}_render"
    return f"{name}{suffix}"


def write_standalone_document(markup: str, directory: Optional[Path] = None) -> Path:
    """Write ``markup`` unchanged to a temporary ``.svg`` file and return its path."""
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        suffix=".svg",
        prefix="schedule-",
        dir=directory,
        delete=False,
    ) as handle:
        handle.write(markup)
    return Path(handle.name)


def export_diagram(diagram: RenderedDiagram, output_path: Union[str, Path]) -> Path:
    """Write the diagram markup, or its DOT source for ``.dot``/``.gv`` paths."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    content = diagram.source if output_path.suffix.lower() in SOURCE_SUFFIXES else diagram.markup
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    return output_path


class DiagramExporter:
    """Exports the pipeline's last rendered diagram."""

    def __init__(
        self,
        pipeline: RegenerationPipeline,
        release_delay_ms: int = 5000,
        opener: Opener = open_with_desktop,
        scheduler: Scheduler = schedule_with_timer,
        directory: Optional[Path] = None,
    ) -> None:
        self.pipeline = pipeline
        self.release_delay_ms = release_delay_ms
        self._opener = opener
        self._scheduler = scheduler
        self._directory = directory

    @property
    def diagram(self) -> Optional[RenderedDiagram]:
        return self.pipeline.last_diagram

    def open_in_new_tab(self) -> Optional[Path]:
        """Open the last diagram as a standalone document.

        The temporary file is released once the viewer had time to load it,
        or right away if it could not be opened. Returns ``None`` when nothing
        has been rendered yet or opening failed.
        """
        diagram = self.diagram
        if diagram is None:
            return None

        path = write_standalone_document(diagram.markup, self._directory)
        try:
            opened = self._opener(path)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to open %s: %s", path, exc)
            opened = False

        if not opened:
            self._release(path)
            return None
        self._scheduler(self.release_delay_ms, lambda: self._release(path))
        return path

    def save(self, output_path: Union[str, Path]) -> Optional[Path]:
        diagram = self.diagram
        if diagram is None:
            return None
        return export_diagram(diagram, output_path)

    @staticmethod
    def _release(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.debug("Could not remove temporary export %s: %s", path, exc)
