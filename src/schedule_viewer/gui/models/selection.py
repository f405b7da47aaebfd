"""Selection model shared by the controls, the pipeline, and the share action."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from ...core.selection import ScheduleKey, SelectionState


class SelectionModel(QObject):
    """Centralizes the current selection so every component reads consistent state."""

    changed = Signal(object)  # Emits SelectionState

    def __init__(self, initial: SelectionState | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state = initial or SelectionState()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def schedule(self) -> ScheduleKey:
        return self._state.schedule

    # ------------------------------------------------------------------
    # Mutation helpers
    # ------------------------------------------------------------------
    def set_schedule(self, key: ScheduleKey) -> None:
        self.replace(self._state.with_schedule(key))

    def set_include(self, include: str) -> None:
        self.replace(self._state.with_include(include))

    def set_exclude(self, exclude: str) -> None:
        self.replace(self._state.with_exclude(exclude))

    def replace(self, state: SelectionState) -> None:
        """Swap in ``state``; listeners are only notified on an actual change."""
        if state == self._state:
            return
        self._state = state
        self.changed.emit(state)
