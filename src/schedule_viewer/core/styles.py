"""Colour themes for generated schedule graphs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict


@dataclass(frozen=True)
class Style:
    fontname: str
    color_background: str
    color_system: str
    color_system_border: str
    color_set: str
    color_set_border: str
    color_edge: str
    multiple_set_edge_color: str
    ambiguity_color: str
    ambiguity_bgcolor: str

    @classmethod
    def light(cls) -> "Style":
        return cls(
            fontname="Helvetica",
            color_background="white",
            color_system="white",
            color_system_border="black",
            color_set="white",
            color_set_border="black",
            color_edge="black",
            multiple_set_edge_color="blue",
            ambiguity_color="#c93526",
            ambiguity_bgcolor="#d3d3d3",
        )

    @classmethod
    def dark_discord(cls) -> "Style":
        return cls(
            fontname="Helvetica",
            color_background="#35393f",
            color_system="#eff1f3",
            color_system_border="#eff1f3",
            color_set="#99aab5",
            color_set_border="black",
            color_edge="white",
            multiple_set_edge_color="blue",
            ambiguity_color="#c93526",
            ambiguity_bgcolor="#c5daeb",
        )

    @classmethod
    def dark_github(cls) -> "Style":
        return cls(
            fontname="Helvetica",
            color_background="#0d1117",
            color_system="#eff1f3",
            color_system_border="#eff1f3",
            color_set="#6f90ad",
            color_set_border="black",
            color_edge="white",
            multiple_set_edge_color="blue",
            ambiguity_color="#c93526",
            ambiguity_bgcolor="#c6e6ff",
        )


STYLES: Dict[str, Callable[[], Style]] = {
    "light": Style.light,
    "dark_discord": Style.dark_discord,
    "dark_github": Style.dark_github,
}


def get_style(name: str) -> Style:
    try:
        return STYLES[name]()
    except KeyError:
        raise ValueError(f"Unknown style '{name}'; expected one of {sorted(STYLES)}") from None
