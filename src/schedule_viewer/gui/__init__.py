"""PySide6 user interface for the schedule viewer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import ViewerSettings


def run(dump_path: Path, link: Optional[str] = None, settings: Optional["ViewerSettings"] = None) -> int:
    """Launch the viewer window; imported lazily so widgets load only when needed."""
    from .app import run as run_app

    return run_app(dump_path, link=link, settings=settings)


__all__ = ["run"]
