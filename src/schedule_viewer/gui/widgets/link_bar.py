"""Read-only address bar holding the shareable link."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QLineEdit, QWidget


class LinkBar(QLineEdit):
    def __init__(self, initial: str = "", parent: Optional[QWidget] = None):
        super().__init__(initial, parent)
        self.setReadOnly(True)
        self.setPlaceholderText("Share to create a link for the current view")

    @property
    def link(self) -> str:
        return self.text()

    def replace_state(self, url: str) -> None:
        """Show ``url`` as the current entry without triggering any navigation."""
        self.setText(url)
        self.setCursorPosition(0)
