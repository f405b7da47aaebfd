"""System name prettifying."""

from __future__ import annotations

from typing import List


def _split_top_level(text: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    start = 0
    for idx, char in enumerate(text):
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(text[start:idx])
            start = idx + 1
    parts.append(text[start:])
    return parts


def short_name(type_name: str) -> str:
    """Strip module paths from a type name, including inside generics.

    ``my_game::physics::step<bevy::Transform>`` becomes ``step<Transform>``.
    """
    angle_open = type_name.find("<")
    angle_close = type_name.rfind(">")
    if angle_open == -1 or angle_close < angle_open:
        return type_name.rsplit("::", 1)[-1]

    before = type_name[:angle_open].rsplit("::", 1)[-1]
    inner = type_name[angle_open + 1 : angle_close]
    after = type_name[angle_close + 1 :]
    shortened = ", ".join(short_name(part.strip()) for part in _split_top_level(inner))
    return f"{before}<{shortened}>{after}"
