"""Pan/zoom canvas that displays rendered SVG diagrams."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QByteArray
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtSvgWidgets import QGraphicsSvgItem
from PySide6.QtWidgets import QWidget
import pyqtgraph as pg

from ...errors import DisplayError


ZOOM_STEP = 1.25
FIT_PADDING = 0.02


class DiagramView(pg.GraphicsView):
    """Shows one diagram at a time inside a pannable, zoomable view box.

    Dragging pans, the wheel zooms. Replacing the diagram discards the
    previous zoom level and pan offset.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.view_box = pg.ViewBox(lockAspect=True, invertY=True, enableMenu=False)
        self.setCentralItem(self.view_box)
        self._item: Optional[QGraphicsSvgItem] = None
        self._renderer: Optional[QSvgRenderer] = None
        self._markup = ""

    @property
    def has_diagram(self) -> bool:
        return self._item is not None

    def display(self, markup: str) -> str:
        """Replace the shown diagram; the old one stays if ``markup`` is unusable."""
        renderer = QSvgRenderer(QByteArray(markup.encode("utf-8")))
        if not renderer.isValid():
            raise DisplayError("The layout engine produced markup that cannot be displayed")

        item = QGraphicsSvgItem()
        item.setSharedRenderer(renderer)
        if self._item is not None:
            self.view_box.removeItem(self._item)
        self.view_box.addItem(item)
        self._item = item
        self._renderer = renderer
        self._markup = markup
        return self.serialize()

    def serialize(self) -> str:
        return self._markup

    def reset_navigation(self) -> None:
        """Fit the current diagram, dropping any previous pan and zoom."""
        if self._item is None:
            return
        self.view_box.autoRange(padding=FIT_PADDING)

    def zoom_in(self) -> None:
        self.view_box.scaleBy((1.0 / ZOOM_STEP, 1.0 / ZOOM_STEP))

    def zoom_out(self) -> None:
        self.view_box.scaleBy((ZOOM_STEP, ZOOM_STEP))

    def fit(self) -> None:
        self.reset_navigation()
