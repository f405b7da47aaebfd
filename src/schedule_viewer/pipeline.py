"""
Regeneration pipeline.

Every change of the selection runs one cycle: generate a graph description for
the selected schedule, lay it out, and show the resulting diagram. A failing
cycle leaves the previously displayed diagram and its export snapshot in place
and reports a message instead.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, TypeVar

from PySide6.QtCore import QObject, Signal

from .core.selection import SelectionState
from .engines import GraphEngine, LayoutEngine
from .errors import ViewerError
from .gui.models import SelectionModel


logger = logging.getLogger(__name__)

T = TypeVar("T")


class PipelineState(Enum):
    IDLE = "idle"
    RENDERING = "rendering"
    DISPLAYED = "displayed"
    FAILED = "failed"


@dataclass(frozen=True)
class RenderedDiagram:
    """Snapshot of the last successfully displayed diagram."""

    markup: str
    source: str
    selection: SelectionState
    generation: int


class DiagramSurface(Protocol):
    def display(self, markup: str) -> str:
        """Materialize ``markup`` and return its serialized snapshot.

        Must raise without changing what is displayed if the markup cannot be
        materialized.
        """
        ...

    def reset_navigation(self) -> None: ...


def error_message(exc: BaseException) -> str:
    if isinstance(exc, ViewerError):
        return exc.message
    return str(exc) or type(exc).__name__


def _timed(name: str, func: Callable[[], T]) -> T:
    start = time.perf_counter()
    try:
        return func()
    finally:
        logger.debug("%s took %.1f ms", name, (time.perf_counter() - start) * 1000.0)


class RegenerationPipeline(QObject):
    """Keeps the displayed diagram in step with the selection model."""

    state_changed = Signal(object)  # Emits PipelineState
    diagram_changed = Signal(object)  # Emits RenderedDiagram
    error_occurred = Signal(str)

    def __init__(
        self,
        graph_engine: GraphEngine,
        layout_engine: LayoutEngine,
        surface: DiagramSurface,
        selection: SelectionModel,
        output_format: str = "svg",
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.graph_engine = graph_engine
        self.layout_engine = layout_engine
        self.surface = surface
        self.selection = selection
        self.output_format = output_format
        self._state = PipelineState.IDLE
        self._diagram: Optional[RenderedDiagram] = None
        self._generation = 0
        self._bound = False

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def last_diagram(self) -> Optional[RenderedDiagram]:
        return self._diagram

    @property
    def generation(self) -> int:
        return self._generation

    def bind(self) -> None:
        """Run a cycle on every selection change."""
        if self._bound:
            return
        self.selection.changed.connect(self._on_selection_changed)
        self._bound = True

    def _on_selection_changed(self, _state: SelectionState) -> None:
        self.regenerate()

    def _set_state(self, state: PipelineState) -> None:
        if state == self._state:
            return
        self._state = state
        self.state_changed.emit(state)

    def regenerate(self) -> bool:
        """Run one cycle; returns whether a new diagram was displayed."""
        selection = self.selection.state
        if selection.schedule.is_empty:
            logger.debug("No schedule selected; skipping regeneration")
            return False

        self._generation += 1
        generation = self._generation
        self._set_state(PipelineState.RENDERING)
        logger.info("Generate %s", selection.schedule.composite)
        try:
            diagram = self._run_cycle(selection, generation)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Regeneration of %s failed", selection.schedule.composite)
            self._set_state(PipelineState.FAILED)
            self._set_state(PipelineState.DISPLAYED if self._diagram else PipelineState.IDLE)
            self.error_occurred.emit(error_message(exc))
            return False

        if diagram is None:
            logger.debug("Discarding stale result of generation %d", generation)
            return False
        self._diagram = diagram
        self._reset_navigation()
        self._set_state(PipelineState.DISPLAYED)
        self.diagram_changed.emit(diagram)
        return True

    def _reset_navigation(self) -> None:
        # The new diagram is already displayed and stored at this point.
        try:
            self.surface.reset_navigation()
        except Exception:  # noqa: BLE001
            logger.exception("Resetting navigation failed")

    def _run_cycle(self, selection: SelectionState, generation: int) -> Optional[RenderedDiagram]:
        source = _timed(
            "generate",
            lambda: self.graph_engine.generate(
                selection.schedule_name,
                selection.render_app,
                selection.include,
                selection.exclude,
            ),
        )
        markup = _timed("layout", lambda: self.layout_engine.render(source, self.output_format))
        if generation != self._generation:
            return None
        snapshot = self.surface.display(markup)
        return RenderedDiagram(markup=snapshot, source=source, selection=selection, generation=generation)
