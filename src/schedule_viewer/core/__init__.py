"""Qt-free building blocks: selection values, the query codec, and graph generation."""

from .codec import (
    DEFAULT_SCHEDULE_KEY,
    DecodedSelection,
    decode_query,
    encode_query,
    initial_selection,
    share_link,
)
from .graph import GraphSettings, remove_transitive_edges, schedule_graph_dot, split_filter, system_filter
from .names import short_name
from .selection import EMPTY_KEY, ScheduleKey, SelectionState
from .styles import Style, get_style

__all__ = [
    "DEFAULT_SCHEDULE_KEY",
    "DecodedSelection",
    "decode_query",
    "encode_query",
    "initial_selection",
    "share_link",
    "GraphSettings",
    "remove_transitive_edges",
    "schedule_graph_dot",
    "split_filter",
    "system_filter",
    "short_name",
    "EMPTY_KEY",
    "ScheduleKey",
    "SelectionState",
    "Style",
    "get_style",
]
