"""Shareable link controller."""

from __future__ import annotations

import logging
from typing import Protocol

from ...core.codec import share_link
from ..models import SelectionModel


logger = logging.getLogger(__name__)


class Clipboard(Protocol):
    def setText(self, text: str) -> None: ...


class AddressBar(Protocol):
    def replace_state(self, url: str) -> None: ...


class ShareController:
    """Turns the current selection into a link, copies it, and shows it."""

    def __init__(
        self,
        selection: SelectionModel,
        base_url: str,
        clipboard: Clipboard,
        address_bar: AddressBar,
    ):
        self.selection = selection
        self.base_url = base_url
        self.clipboard = clipboard
        self.address_bar = address_bar

    def current_link(self) -> str:
        return share_link(self.base_url, self.selection.state)

    def share(self) -> str:
        link = self.current_link()
        try:
            self.clipboard.setText(link)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not copy link to clipboard: %s", exc)
        self.address_bar.replace_state(link)
        logger.info("Shared %s", link)
        return link
