"""
Schedule graph generation.

Turns a :class:`~schedule_viewer.config.ScheduleDefinition` into a Graphviz DOT
document. Systems are boxes, system sets are clusters, and ordering
constraints are edges. Include and exclude filters restrict which systems are
shown; root sets and sets containing a shown system are always kept.
Ambiguous system pairs are drawn as undirected edges.
"""

from __future__ import annotations

import html
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

import graphviz

from ..config import AmbiguityDefinition, ScheduleDefinition
from .names import short_name
from .styles import Style


Edge = Tuple[str, str]

EDGE_STYLES = ("none", "line", "polyline", "curved", "ortho", "spline")


@dataclass(frozen=True)
class GraphSettings:
    """Rendering options for generated graphs."""

    style: Style = field(default_factory=Style.dark_github)
    rankdir: str = "LR"
    edge_style: str = "spline"
    remove_transitive_edges: bool = True
    prettify_system_names: bool = True
    collapse_single_system_sets: bool = False
    ambiguity_enable: bool = True
    ambiguity_enable_on_world: bool = False

    def __post_init__(self) -> None:
        if self.edge_style not in EDGE_STYLES:
            raise ValueError(f"Unknown edge style '{self.edge_style}'; expected one of {list(EDGE_STYLES)}")


def split_filter(text: str) -> List[str]:
    """Split a comma-separated filter, dropping blank items."""
    return [item.strip() for item in text.split(",") if item.strip()]


def system_filter(include: str, exclude: str) -> Callable[[str], bool]:
    """Build the predicate deciding whether a system name is shown.

    Exclusions win over inclusions; an empty include list includes everything.
    Matching is by substring on the fully qualified name.
    """
    includes = split_filter(include)
    excludes = split_filter(exclude)

    def accept(name: str) -> bool:
        if any(item in name for item in excludes):
            return False
        return not includes or any(item in name for item in includes)

    return accept


def remove_transitive_edges(edges: Sequence[Edge]) -> List[Edge]:
    """Drop every edge ``a -> c`` for which a longer path ``a -> ... -> c`` exists."""
    adjacency: Dict[str, List[str]] = defaultdict(list)
    for tail, head in edges:
        adjacency[tail].append(head)

    def reachable_indirectly(tail: str, head: str) -> bool:
        stack = [node for node in adjacency[tail] if node != head]
        seen = set(stack)
        while stack:
            node = stack.pop()
            if node == head:
                return True
            for successor in adjacency[node]:
                if successor not in seen:
                    seen.add(successor)
                    stack.append(successor)
        return False

    return [(tail, head) for tail, head in edges if not reachable_indirectly(tail, head)]


class _ScheduleGraphBuilder:
    def __init__(self, schedule: ScheduleDefinition, settings: GraphSettings) -> None:
        self.schedule = schedule
        self.settings = settings
        self.set_ids = {item.name: f"set{idx}" for idx, item in enumerate(schedule.sets)}
        self.system_ids = {item.name: f"system{idx}" for idx, item in enumerate(schedule.systems)}
        self.set_parents = {item.name: list(item.parents) for item in schedule.sets}
        # Collapsed set -> its only system (if any), and the reverse lookup.
        self.collapsed: Dict[str, Optional[str]] = {}
        self.collapsed_children: Dict[str, str] = {}

    def _ancestors(self, set_names: Sequence[str]) -> Set[str]:
        found: Set[str] = set()
        stack = list(set_names)
        while stack:
            name = stack.pop()
            if name in found:
                continue
            found.add(name)
            stack.extend(self.set_parents.get(name, []))
        return found

    def _node_id(self, name: str) -> str:
        if name in self.collapsed_children:
            return self.set_ids[self.collapsed_children[name]]
        return self.set_ids.get(name) or self.system_ids[name]

    def _is_cluster(self, name: str) -> bool:
        return name in self.set_ids and name not in self.collapsed

    def _cluster(self, set_name: str) -> str:
        return f"cluster_{self.set_ids[set_name]}"

    def _label(self, name: str) -> str:
        label = short_name(name) if self.settings.prettify_system_names else name
        return graphviz.nohtml(label)

    def _kept_sets(self, systems: Sequence, filtering: bool) -> Set[str]:
        if not filtering:
            return set(self.set_ids)
        roots = [item.name for item in self.schedule.sets if not item.parents]
        return set(roots) | self._ancestors([name for system in systems for name in system.sets])

    def _collapse(
        self,
        kept_sets: Set[str],
        child_sets: Dict[Optional[str], List[str]],
        child_systems: Dict[Optional[str], List[str]],
        hierarchy_edges: List[Edge],
    ) -> None:
        extra_parents = {parent for _, parent in hierarchy_edges}
        for set_name in kept_sets:
            children = child_systems.get(set_name, [])
            if child_sets.get(set_name) or len(children) > 1 or set_name in extra_parents:
                continue
            self.collapsed[set_name] = children[0] if children else None
            if children:
                self.collapsed_children[children[0]] = set_name

    def build(self, include: str, exclude: str) -> str:
        accept = system_filter(include, exclude)
        filtering = bool(split_filter(include) or split_filter(exclude))

        systems = [system for system in self.schedule.systems if accept(system.name)]
        kept_systems = {system.name for system in systems}
        kept_sets = self._kept_sets(systems, filtering)
        kept_nodes = kept_systems | kept_sets

        child_sets: Dict[Optional[str], List[str]] = defaultdict(list)
        child_systems: Dict[Optional[str], List[str]] = defaultdict(list)
        hierarchy_edges: List[Edge] = []
        for item in self.schedule.sets:
            if item.name not in kept_sets:
                continue
            parents = [parent for parent in item.parents if parent in kept_sets]
            child_sets[parents[0] if parents else None].append(item.name)
            hierarchy_edges.extend((item.name, parent) for parent in parents[1:])
        for system in systems:
            parents = [name for name in system.sets if name in kept_sets]
            child_systems[parents[0] if parents else None].append(system.name)
            hierarchy_edges.extend((system.name, parent) for parent in parents[1:])

        if self.settings.collapse_single_system_sets:
            self._collapse(kept_sets, child_sets, child_systems, hierarchy_edges)

        dependency_edges: List[Edge] = []
        for system in systems:
            candidates = [(before, system.name) for before in system.after]
            candidates += [(system.name, after) for after in system.before]
            for edge in candidates:
                if edge[0] in kept_nodes and edge[1] in kept_nodes and edge not in dependency_edges:
                    dependency_edges.append(edge)
        if self.settings.remove_transitive_edges:
            dependency_edges = remove_transitive_edges(dependency_edges)

        style = self.settings.style
        dot = graphviz.Digraph(
            name=self.schedule.name,
            graph_attr={
                "rankdir": self.settings.rankdir,
                "splines": self.settings.edge_style,
                "bgcolor": style.color_background,
                "fontname": style.fontname,
                "fontcolor": style.color_edge,
                "compound": "true",
                "label": graphviz.nohtml(self.schedule.name),
            },
            node_attr={
                "shape": "box",
                "style": "filled",
                "fillcolor": style.color_system,
                "color": style.color_system_border,
                "fontname": style.fontname,
            },
            edge_attr={"color": style.color_edge},
        )
        self._emit_level(dot, None, child_sets, child_systems)

        for tail, head in dependency_edges:
            tail_id, head_id = self._node_id(tail), self._node_id(head)
            if tail_id == head_id:
                continue
            dot.edge(tail_id, head_id, **self._edge_attrs(tail, head))
        for member, parent in hierarchy_edges:
            attrs = self._edge_attrs(member, parent)
            attrs.update(style="dashed", color=style.multiple_set_edge_color)
            dot.edge(self._node_id(member), self._node_id(parent), **attrs)
        if self.settings.ambiguity_enable:
            for ambiguity in self.schedule.ambiguities:
                if ambiguity.first in kept_systems and ambiguity.second in kept_systems:
                    self._emit_ambiguity(dot, ambiguity)
        return dot.source

    def _emit_level(
        self,
        graph: graphviz.Digraph,
        parent: Optional[str],
        child_sets: Dict[Optional[str], List[str]],
        child_systems: Dict[Optional[str], List[str]],
    ) -> None:
        style = self.settings.style
        for set_name in child_sets.get(parent, []):
            if set_name in self.collapsed:
                graph.node(
                    self.set_ids[set_name],
                    label=self._label(set_name),
                    tooltip=graphviz.nohtml(set_name),
                    fillcolor=style.color_set,
                    color=style.color_set_border,
                )
                continue
            with graph.subgraph(name=self._cluster(set_name)) as cluster:
                cluster.attr(
                    label=self._label(set_name),
                    style="rounded,filled",
                    fillcolor=style.color_set,
                    color=style.color_set_border,
                    tooltip=graphviz.nohtml(set_name),
                )
                # Anchor so edges to and from the set have a node to attach to.
                cluster.node(self.set_ids[set_name], label="", style="invis", shape="point")
                self._emit_level(cluster, set_name, child_sets, child_systems)
        for system_name in child_systems.get(parent, []):
            if system_name in self.collapsed_children:
                continue
            graph.node(
                self.system_ids[system_name],
                label=self._label(system_name),
                tooltip=graphviz.nohtml(system_name),
            )

    def _emit_ambiguity(self, graph: graphviz.Digraph, ambiguity: AmbiguityDefinition) -> None:
        if not ambiguity.conflicts and not self.settings.ambiguity_enable_on_world:
            return
        style = self.settings.style
        if ambiguity.conflicts:
            rows = "".join(
                f'<tr><td bgcolor="{style.ambiguity_bgcolor}">{html.escape(short_name(name))}</td></tr>'
                for name in ambiguity.conflicts
            )
            label = f'<<table border="0" cellborder="0">{rows}</table>>'
        else:
            label = "World"
        graph.edge(
            self._node_id(ambiguity.first),
            self._node_id(ambiguity.second),
            dir="none",
            constraint="false",
            color=style.ambiguity_color,
            fontcolor=style.ambiguity_color,
            label=label,
            labeltooltip=graphviz.nohtml(f"{ambiguity.first} <-> {ambiguity.second}"),
        )

    def _edge_attrs(self, tail: str, head: str) -> Dict[str, str]:
        attrs: Dict[str, str] = {}
        if self._is_cluster(tail):
            attrs["ltail"] = self._cluster(tail)
        if self._is_cluster(head):
            attrs["lhead"] = self._cluster(head)
        return attrs


def schedule_graph_dot(
    schedule: ScheduleDefinition,
    include: str = "",
    exclude: str = "",
    settings: Optional[GraphSettings] = None,
) -> str:
    """Return the DOT document for ``schedule`` restricted by the filters."""
    return _ScheduleGraphBuilder(schedule, settings or GraphSettings()).build(include, exclude)
