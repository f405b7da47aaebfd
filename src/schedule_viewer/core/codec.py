"""Mapping between selection values and shareable query strings.

Decoding is permissive: every key is optional and unknown keys are ignored.
Encoding is minimal: only ``schedule`` is always written, ``renderApp`` only
when true, and the filters only when non-empty. The decoded schedule is not
checked against the catalog here because the catalog may not be loaded yet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from .selection import ScheduleKey, SelectionState


SCHEDULE_PARAM = "schedule"
RENDER_APP_PARAM = "renderApp"
INCLUDE_PARAM = "include"
EXCLUDE_PARAM = "exclude"

DEFAULT_SCHEDULE_KEY = ScheduleKey(name="PreUpdate", render_app=False)


@dataclass(frozen=True)
class DecodedSelection:
    """Partial selection recovered from a query string."""

    schedule: Optional[ScheduleKey] = None
    include: str = ""
    exclude: str = ""


def _query_part(query: str) -> str:
    query = query.strip()
    parts = urlsplit(query)
    if parts.scheme:
        return parts.query
    if query.startswith("?"):
        query = query[1:]
    return query.split("#", 1)[0]


def decode_query(query: str) -> DecodedSelection:
    """Decode a bare query, a ``?``-prefixed query, or a full link."""
    params = parse_qs(_query_part(query), keep_blank_values=True)

    def first(key: str) -> Optional[str]:
        values = params.get(key)
        return values[0] if values else None

    name = first(SCHEDULE_PARAM)
    schedule = None
    if name is not None:
        schedule = ScheduleKey(name=name, render_app=first(RENDER_APP_PARAM) == "true")
    return DecodedSelection(
        schedule=schedule,
        include=first(INCLUDE_PARAM) or "",
        exclude=first(EXCLUDE_PARAM) or "",
    )


def encode_query(state: SelectionState) -> str:
    pairs: List[Tuple[str, str]] = [(SCHEDULE_PARAM, state.schedule_name)]
    if state.render_app:
        pairs.append((RENDER_APP_PARAM, "true"))
    if state.include:
        pairs.append((INCLUDE_PARAM, state.include))
    if state.exclude:
        pairs.append((EXCLUDE_PARAM, state.exclude))
    return urlencode(pairs)


def share_link(base_url: str, state: SelectionState) -> str:
    """Return ``base_url`` with its query replaced by the encoded selection."""
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, encode_query(state), ""))


def is_legal_key(key: Optional[ScheduleKey]) -> bool:
    return key is not None and not key.is_empty


def initial_selection(
    decoded: DecodedSelection,
    default: ScheduleKey = DEFAULT_SCHEDULE_KEY,
) -> SelectionState:
    """Pick the first selection to display.

    A decoded key is used verbatim, without catalog membership checks; an
    unknown schedule surfaces later as a render-time failure. A missing or
    empty key falls back to ``default``.
    """
    schedule = decoded.schedule if is_legal_key(decoded.schedule) else default
    return SelectionState(schedule=schedule, include=decoded.include, exclude=decoded.exclude)
