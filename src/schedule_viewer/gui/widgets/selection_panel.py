"""Schedule picker and system filter controls."""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QStandardItem, QStandardItemModel
from PySide6.QtWidgets import QComboBox, QFormLayout, QLineEdit, QWidget

from ...catalog import OptionGroup
from ...core.selection import ScheduleKey, SelectionState


KEY_ROLE = Qt.ItemDataRole.UserRole


class SelectionPanel(QWidget):
    """Controls for the schedule, include filter, and exclude filter."""

    # Signals
    schedule_changed = Signal(object)  # ScheduleKey
    include_changed = Signal(str)
    exclude_changed = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        layout = QFormLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self.schedule_combo = QComboBox()
        self.schedule_combo.setMinimumWidth(260)
        self._options_model = QStandardItemModel(self.schedule_combo)
        self.schedule_combo.setModel(self._options_model)
        layout.addRow("Schedule", self.schedule_combo)

        self.include_edit = QLineEdit()
        self.include_edit.setPlaceholderText("comma-separated, e.g. physics, input")
        self.include_edit.setClearButtonEnabled(True)
        layout.addRow("Include", self.include_edit)

        self.exclude_edit = QLineEdit()
        self.exclude_edit.setPlaceholderText("comma-separated")
        self.exclude_edit.setClearButtonEnabled(True)
        layout.addRow("Exclude", self.exclude_edit)

    def _connect_signals(self) -> None:
        self.schedule_combo.currentIndexChanged.connect(self._on_schedule_index_changed)
        self.include_edit.textChanged.connect(self.include_changed.emit)
        self.exclude_edit.textChanged.connect(self.exclude_changed.emit)

    def _on_schedule_index_changed(self, index: int) -> None:
        composite = self.schedule_combo.itemData(index, KEY_ROLE)
        if isinstance(composite, str):
            self.schedule_changed.emit(ScheduleKey.parse(composite))

    def set_option_groups(self, groups: Sequence[OptionGroup]) -> None:
        """Repopulate the picker; no selection is reported while rebuilding."""
        self.schedule_combo.blockSignals(True)
        try:
            self._options_model.clear()
            bold = QFont()
            bold.setBold(True)
            for group in groups:
                header = QStandardItem(group.label)
                header.setFlags(Qt.ItemFlag.NoItemFlags)
                header.setFont(bold)
                self._options_model.appendRow(header)
                for option in group.options:
                    item = QStandardItem(f"    {option.label}")
                    item.setData(option.key.composite, KEY_ROLE)
                    item.setToolTip(option.key.composite)
                    self._options_model.appendRow(item)
            self.schedule_combo.setCurrentIndex(-1)
        finally:
            self.schedule_combo.blockSignals(False)

    def index_for(self, key: ScheduleKey) -> int:
        for row in range(self._options_model.rowCount()):
            if self._options_model.item(row).data(KEY_ROLE) == key.composite:
                return row
        return -1

    def current_key(self) -> Optional[ScheduleKey]:
        composite = self.schedule_combo.currentData(KEY_ROLE)
        return ScheduleKey.parse(composite) if isinstance(composite, str) else None

    def sync(self, state: SelectionState) -> None:
        """Reflect ``state`` in the controls without re-emitting change signals."""
        widgets = (self.schedule_combo, self.include_edit, self.exclude_edit)
        for widget in widgets:
            widget.blockSignals(True)
        try:
            index = self.index_for(state.schedule)
            if self.schedule_combo.currentIndex() != index:
                self.schedule_combo.setCurrentIndex(index)
            if self.include_edit.text() != state.include:
                self.include_edit.setText(state.include)
            if self.exclude_edit.text() != state.exclude:
                self.exclude_edit.setText(state.exclude)
        finally:
            for widget in widgets:
                widget.blockSignals(False)
