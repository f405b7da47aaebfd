"""
Graph and layout engines.

The viewer talks to two collaborators through small protocols: a graph engine
that enumerates schedules and produces graph descriptions, and a layout engine
that turns a description into diagram markup. The shipped implementations read
a YAML schedule dump and lay out with Graphviz.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

import graphviz

from .config import ScheduleDefinition, ScheduleDump, load_schedule_dump
from .core.graph import GraphSettings, schedule_graph_dot
from .core.styles import get_style
from .errors import CatalogError, GraphGenerationError, LayoutError
from .settings import ViewerSettings


logger = logging.getLogger(__name__)


class GraphEngine(Protocol):
    def initialize(self) -> None: ...

    def main_schedules(self) -> Sequence[str]: ...

    def other_schedules(self) -> Sequence[str]: ...

    def render_schedules(self) -> Sequence[str]: ...

    def generate(self, schedule_name: str, render_app: bool, include: str, exclude: str) -> str: ...


class LayoutEngine(Protocol):
    def initialize(self) -> None: ...

    def render(self, document: str, output_format: str) -> str: ...


def graph_settings_from(settings: ViewerSettings) -> GraphSettings:
    return GraphSettings(
        style=get_style(settings.style),
        rankdir=settings.rankdir,
        edge_style=settings.edge_style,
        remove_transitive_edges=settings.remove_transitive_edges,
        prettify_system_names=settings.prettify_system_names,
        collapse_single_system_sets=settings.collapse_single_system_sets,
        ambiguity_enable=settings.ambiguity_enable,
        ambiguity_enable_on_world=settings.ambiguity_enable_on_world,
    )


class YamlScheduleEngine:
    """Graph engine backed by a schedule dump file."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        *,
        dump: Optional[ScheduleDump] = None,
        graph_settings: Optional[GraphSettings] = None,
    ) -> None:
        if (path is None) == (dump is None):
            raise ValueError("Provide exactly one of path or dump")
        self._path = Path(path) if path is not None else None
        self._dump = dump
        self.graph_settings = graph_settings or GraphSettings()

    def initialize(self) -> None:
        if self._path is not None and self._dump is None:
            self._dump = load_schedule_dump(self._path)
            logger.debug(
                "Loaded %d main, %d other, %d render schedules from %s",
                len(self._dump.main),
                len(self._dump.other),
                len(self._dump.render),
                self._path,
            )

    @property
    def dump(self) -> ScheduleDump:
        if self._dump is None:
            raise CatalogError("Graph engine has not been initialized")
        return self._dump

    def main_schedules(self) -> List[str]:
        return [schedule.name for schedule in self.dump.main]

    def other_schedules(self) -> List[str]:
        return [schedule.name for schedule in self.dump.other]

    def render_schedules(self) -> List[str]:
        return [schedule.name for schedule in self.dump.render]

    def _find(self, schedule_name: str, render_app: bool) -> ScheduleDefinition:
        candidates = self.dump.render if render_app else [*self.dump.main, *self.dump.other]
        for schedule in candidates:
            if schedule.name == schedule_name:
                return schedule
        app = "render app" if render_app else "app"
        raise GraphGenerationError(f"schedule '{schedule_name}' not found in {app}")

    def generate(self, schedule_name: str, render_app: bool, include: str, exclude: str) -> str:
        schedule = self._find(schedule_name, render_app)
        try:
            return schedule_graph_dot(schedule, include, exclude, self.graph_settings)
        except Exception as exc:  # noqa: BLE001
            raise GraphGenerationError(f"Failed to generate graph for '{schedule_name}': {exc}") from exc


class GraphvizLayoutEngine:
    """Layout engine that pipes DOT documents through a Graphviz program."""

    def __init__(self, program: str = "dot") -> None:
        self.program = program
        self.version: Optional[tuple] = None

    def initialize(self) -> None:
        try:
            self.version = graphviz.version()
        except graphviz.ExecutableNotFound as exc:
            raise LayoutError(f"Graphviz executables not found: {exc}") from exc
        logger.debug("Using Graphviz %s", ".".join(str(part) for part in self.version))

    def render(self, document: str, output_format: str = "svg") -> str:
        try:
            return graphviz.pipe_string(self.program, output_format, document, quiet=True)
        except graphviz.ExecutableNotFound as exc:
            raise LayoutError(f"Graphviz executables not found: {exc}") from exc
        except graphviz.CalledProcessError as exc:
            details = exc.stderr.decode("utf-8", "replace") if isinstance(exc.stderr, bytes) else exc.stderr
            raise LayoutError(f"Graphviz failed: {(details or str(exc)).strip()}") from exc
        except ValueError as exc:
            raise LayoutError(str(exc)) from exc
