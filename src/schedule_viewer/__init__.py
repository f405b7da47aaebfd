"""
Interactive viewer for the system ordering graphs of an application's schedules.

The package keeps one selection (schedule, render app flag, include and
exclude filters) in step across a shareable link, the viewer controls, and the
rendered diagram.
"""

from .catalog import (
    OptionGroup,
    ScheduleCatalog,
    ScheduleOption,
    build_option_groups,
    initialize_engines,
    load_catalog,
)
from .config import ScheduleDefinition, ScheduleDump, load_schedule_dump
from .core import (
    DEFAULT_SCHEDULE_KEY,
    DecodedSelection,
    GraphSettings,
    ScheduleKey,
    SelectionState,
    decode_query,
    encode_query,
    initial_selection,
    schedule_graph_dot,
    share_link,
)
from .engines import GraphEngine, GraphvizLayoutEngine, LayoutEngine, YamlScheduleEngine
from .errors import CatalogError, DisplayError, GraphGenerationError, LayoutError, ViewerError
from .settings import ViewerSettings, get_settings, reset_settings_cache

__all__ = [
    "OptionGroup",
    "ScheduleCatalog",
    "ScheduleOption",
    "build_option_groups",
    "initialize_engines",
    "load_catalog",
    "ScheduleDefinition",
    "ScheduleDump",
    "load_schedule_dump",
    "DEFAULT_SCHEDULE_KEY",
    "DecodedSelection",
    "GraphSettings",
    "ScheduleKey",
    "SelectionState",
    "decode_query",
    "encode_query",
    "initial_selection",
    "schedule_graph_dot",
    "share_link",
    "GraphEngine",
    "GraphvizLayoutEngine",
    "LayoutEngine",
    "YamlScheduleEngine",
    "CatalogError",
    "DisplayError",
    "GraphGenerationError",
    "LayoutError",
    "ViewerError",
    "ViewerSettings",
    "get_settings",
    "reset_settings_cache",
]
