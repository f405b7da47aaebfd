"""
Schedule dump models and loader.

A schedule dump is a YAML file describing every schedule of an application,
grouped the way the viewer presents them (main, other, render). It is the
input of :class:`schedule_viewer.engines.YamlScheduleEngine`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Set, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import CatalogError


def _require_unique(names: Iterable[str], what: str) -> None:
    seen: Set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"Duplicate {what} name: {name}")
        seen.add(name)


class SetDefinition(BaseModel):
    """A system set; sets may be nested inside other sets."""

    name: str = Field(..., min_length=1, description="Set label, unique within the schedule")
    parents: List[str] = Field(default_factory=list, description="Enclosing sets")


class SystemDefinition(BaseModel):
    """A single system and its ordering constraints."""

    name: str = Field(..., min_length=1, description="Fully qualified system name")
    sets: List[str] = Field(default_factory=list, description="Sets the system belongs to")
    after: List[str] = Field(
        default_factory=list, description="Systems or sets that must run before this system"
    )
    before: List[str] = Field(
        default_factory=list, description="Systems or sets that must run after this system"
    )


class AmbiguityDefinition(BaseModel):
    """Two systems without a mutual ordering that access the same data.

    Written in a dump either as a mapping or as ``[first, second, [conflicts...]]``.
    An empty ``conflicts`` list means the pair conflicts on the whole world.
    """

    first: str = Field(..., min_length=1)
    second: str = Field(..., min_length=1)
    conflicts: List[str] = Field(default_factory=list, description="Conflicting component names")

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            if len(value) not in (2, 3):
                raise ValueError("ambiguity must be [first, second] or [first, second, [conflicts...]]")
            first, second, *rest = value
            return {"first": first, "second": second, "conflicts": rest[0] if rest else []}
        return value


class ScheduleDefinition(BaseModel):
    """One schedule: its sets, systems, and the ordering edges between them."""

    name: str = Field(..., min_length=1)
    sets: List[SetDefinition] = Field(default_factory=list)
    systems: List[SystemDefinition] = Field(default_factory=list)
    ambiguities: List[AmbiguityDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_references(self) -> "ScheduleDefinition":
        set_names = [item.name for item in self.sets]
        system_names = [item.name for item in self.systems]
        _require_unique(set_names, "set")
        _require_unique(system_names, "system")
        overlap = set(set_names) & set(system_names)
        if overlap:
            raise ValueError(f"Names used for both a set and a system: {sorted(overlap)}")

        known_sets = set(set_names)
        known_nodes = known_sets | set(system_names)
        for item in self.sets:
            for parent in item.parents:
                if parent not in known_sets:
                    raise ValueError(f"Set '{item.name}' references unknown parent set '{parent}'")
                if parent == item.name:
                    raise ValueError(f"Set '{item.name}' cannot contain itself")
        for system in self.systems:
            for set_name in system.sets:
                if set_name not in known_sets:
                    raise ValueError(f"System '{system.name}' references unknown set '{set_name}'")
            for target in [*system.after, *system.before]:
                if target not in known_nodes:
                    raise ValueError(f"System '{system.name}' is ordered against unknown node '{target}'")
        known_systems = set(system_names)
        for ambiguity in self.ambiguities:
            for name in (ambiguity.first, ambiguity.second):
                if name not in known_systems:
                    raise ValueError(f"Ambiguity references unknown system '{name}'")
        self._check_set_cycles()
        return self

    def _check_set_cycles(self) -> None:
        parents: Dict[str, List[str]] = {item.name: item.parents for item in self.sets}
        visiting: Set[str] = set()
        done: Set[str] = set()

        def visit(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                raise ValueError(f"Set hierarchy contains a cycle through '{name}'")
            visiting.add(name)
            for parent in parents.get(name, []):
                visit(parent)
            visiting.discard(name)
            done.add(name)

        for name in parents:
            visit(name)


class ScheduleDump(BaseModel):
    """Top-level schedule dump grouped into main, other, and render schedules."""

    main: List[ScheduleDefinition] = Field(default_factory=list)
    other: List[ScheduleDefinition] = Field(default_factory=list)
    render: List[ScheduleDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_disjoint_groups(self) -> "ScheduleDump":
        # The render app is a separate namespace; its schedules may reuse main app names.
        _require_unique((schedule.name for schedule in [*self.main, *self.other]), "schedule")
        _require_unique((schedule.name for schedule in self.render), "render schedule")
        return self

    @field_validator("main", "other", "render", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


def load_schedule_dump(path: Union[str, Path]) -> ScheduleDump:
    """
    Load and validate a schedule dump from a YAML file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    CatalogError
        If the file is not valid YAML or does not describe a valid dump.
    """

    dump_path = Path(path).resolve()
    if not dump_path.exists():
        raise FileNotFoundError(f"Schedule dump not found: {dump_path}")

    try:
        with dump_path.open("r", encoding="utf-8") as handle:
            raw_data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"Failed to parse {dump_path.name}: {exc}") from exc

    if not isinstance(raw_data, dict):
        raise CatalogError(f"{dump_path.name} must contain a mapping at the top level")

    try:
        return ScheduleDump.model_validate(raw_data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid schedule dump {dump_path.name}: {exc}") from exc
