"""
Maze text loading and pre-built mazes.

A maze is a list of equal-length rows over the symbol alphabet of
``Tile``, framed by walls:

    #   wall              @   start            $   suicide booth
    X   obstacle          B   breaker          T   teleport (pairs)
    I   inverter          S N E W   path modifiers
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Union


def parse_plan(text: str) -> List[str]:
    """Split maze text into rows, keeping interior and trailing spaces."""
    rows = text.splitlines()
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def load_plan(path: Union[str, Path]) -> List[str]:
    """Read a maze file."""
    return parse_plan(Path(path).read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Pre-built mazes
# ---------------------------------------------------------------------------

def make_open_room() -> List[str]:
    """
    Empty room, booth in the top right corner.

    Path: S S E E E N N N N N
    """
    return [
        "########",
        "#     $#",
        "#      #",
        "#      #",
        "#  @   #",
        "#      #",
        "#      #",
        "########",
    ]


def make_breaker_maze() -> List[str]:
    """
    A breaker opens the obstacle in front of the booth.

    Path: S S S
    """
    return [
        "#####",
        "#@  #",
        "#B  #",
        "#X  #",
        "#$  #",
        "#####",
    ]


def make_breaker_loop() -> List[str]:
    """
    Booth unreachable: the breaker toggles on every pass and the agent
    bounces between it and the cell north of it forever.
    """
    return [
        "#####",
        "#$ X#",
        "# @B#",
        "#####",
    ]


def make_teleport_maze() -> List[str]:
    """
    The start is walled in; only the teleport leads to the booth.

    Path: S E
    """
    return [
        "######",
        "#@#T$#",
        "#T####",
        "######",
    ]


def make_inverter_maze() -> List[str]:
    """
    The inverter reverses priorities at the first wall.

    Path: S N E E (without the inverter: S E E N)
    """
    return [
        "#####",
        "#@ $#",
        "#I  #",
        "#####",
    ]


def make_modifier_maze() -> List[str]:
    """
    A path modifier sends the agent north until it hits the frame.

    Path: S N N E E
    """
    return [
        "#####",
        "#  $#",
        "#@  #",
        "#N  #",
        "#####",
    ]


BUILTIN_MAZES: Dict[str, Callable[[], List[str]]] = {
    "open_room": make_open_room,
    "breaker": make_breaker_maze,
    "breaker_loop": make_breaker_loop,
    "teleport": make_teleport_maze,
    "inverter": make_inverter_maze,
    "modifier": make_modifier_maze,
}
