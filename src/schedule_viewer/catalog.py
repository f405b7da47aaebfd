"""Schedule catalog loading and grouped control options."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .core.selection import ScheduleKey
from .engines import GraphEngine, LayoutEngine


logger = logging.getLogger(__name__)

MAIN_GROUP = "Main"
OTHER_GROUP = "Other"
RENDER_GROUP = "Render"


@dataclass(frozen=True)
class ScheduleCatalog:
    """The three schedule groupings, fixed for the lifetime of a viewer."""

    main: Tuple[str, ...] = ()
    other: Tuple[str, ...] = ()
    render: Tuple[str, ...] = ()

    def contains(self, key: ScheduleKey) -> bool:
        if key.render_app:
            return key.name in self.render
        return key.name in self.main or key.name in self.other


@dataclass(frozen=True)
class ScheduleOption:
    label: str
    key: ScheduleKey


@dataclass(frozen=True)
class OptionGroup:
    label: str
    options: Tuple[ScheduleOption, ...]


def initialize_engines(graph_engine: GraphEngine, layout_engine: LayoutEngine) -> None:
    """Initialize both engines concurrently and wait for both.

    The first failure is re-raised once both have finished.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="engine-init") as pool:
        futures = [pool.submit(graph_engine.initialize), pool.submit(layout_engine.initialize)]
        for future in futures:
            future.result()


def load_catalog(engine: GraphEngine) -> ScheduleCatalog:
    """Fetch the three schedule groupings. Failures propagate to the caller."""
    catalog = ScheduleCatalog(
        main=tuple(engine.main_schedules()),
        other=tuple(engine.other_schedules()),
        render=tuple(engine.render_schedules()),
    )
    logger.info(
        "Catalog loaded: %d main, %d other, %d render schedules",
        len(catalog.main),
        len(catalog.other),
        len(catalog.render),
    )
    return catalog


def _group(label: str, names: Sequence[str], render_app: bool) -> OptionGroup:
    return OptionGroup(
        label=label,
        options=tuple(ScheduleOption(label=name, key=ScheduleKey(name, render_app)) for name in names),
    )


def build_option_groups(catalog: ScheduleCatalog) -> List[OptionGroup]:
    """Return the control options grouped Main, Other, Render, in that order."""
    return [
        _group(MAIN_GROUP, catalog.main, render_app=False),
        _group(OTHER_GROUP, catalog.other, render_app=False),
        _group(RENDER_GROUP, catalog.render, render_app=True),
    ]
