"""Selection values: the schedule key pair and the full selection state."""

from __future__ import annotations

from dataclasses import dataclass, replace


COMPOSITE_SEPARATOR = ":"


@dataclass(frozen=True)
class ScheduleKey:
    """A schedule name paired with the app it belongs to.

    The pair is always moved around as one value; ``composite`` exists only
    for serialisation in places that need a single string.
    """

    name: str
    render_app: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.name

    @property
    def composite(self) -> str:
        flag = "true" if self.render_app else "false"
        return f"{self.name}{COMPOSITE_SEPARATOR}{flag}"

    @classmethod
    def parse(cls, composite: str) -> "ScheduleKey":
        """Split ``"<name>:<flag>"`` at the last separator.

        Schedule names may themselves contain the separator, so only the
        trailing segment is treated as the flag. ``"true"`` is the only
        truthy flag; a missing separator yields a non-render key.
        """
        name, sep, flag = composite.rpartition(COMPOSITE_SEPARATOR)
        if not sep:
            return cls(name=composite, render_app=False)
        return cls(name=name, render_app=flag == "true")

    def __str__(self) -> str:
        return self.composite


EMPTY_KEY = ScheduleKey(name="", render_app=False)


@dataclass(frozen=True)
class SelectionState:
    """Immutable view of what the viewer should display."""

    schedule: ScheduleKey = EMPTY_KEY
    include: str = ""
    exclude: str = ""

    @property
    def schedule_name(self) -> str:
        return self.schedule.name

    @property
    def render_app(self) -> bool:
        return self.schedule.render_app

    def with_schedule(self, key: ScheduleKey) -> "SelectionState":
        return replace(self, schedule=key)

    def with_include(self, include: str) -> "SelectionState":
        return replace(self, include=include)

    def with_exclude(self, exclude: str) -> "SelectionState":
        return replace(self, exclude=exclude)
