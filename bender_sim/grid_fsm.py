"""
Grid finite state machine — the maze as a 2D array of states.

Each cell of the maze is a state. Transitions between states are the four
cardinal directions:

    (1,1) SOUTH -> (1,2)
    (1,1) NORTH -> (1,0)
    (1,1) EAST  -> (2,1)
    (1,1) WEST  -> (0,1)

The machine knows nothing about what the tiles *mean*. Every accepted move
is wrapped in a TransitionEvent and handed to two callbacks:

- ``before(event)`` runs while the destination is not yet entered and may
  cancel the move (obstacles),
- ``after(event)`` runs once the destination has been entered (tile effects).

The event is the only way a callback can touch the grid, and it only
exposes narrow operations: cancel the move, rewrite the destination tile,
or jump to the paired teleport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MazeFormatError(ValueError):
    """The maze text does not describe a valid maze."""


class OutOfBoundsError(IndexError):
    """A transition tried to leave the grid. Fatal for the run."""


class TeleportConfigError(RuntimeError):
    """A teleport was used on a grid without exactly two teleport tiles."""


# ---------------------------------------------------------------------------
# Directions, tiles and positions
# ---------------------------------------------------------------------------

class Direction(IntEnum):
    """The four cardinal directions, in default priority order."""
    SOUTH = 0
    EAST = 1
    NORTH = 2
    WEST = 3

    def delta(self) -> Tuple[int, int]:
        """Column, row displacement for this direction."""
        return {
            Direction.SOUTH: (0, 1),
            Direction.EAST: (1, 0),
            Direction.NORTH: (0, -1),
            Direction.WEST: (-1, 0),
        }[self]

    @staticmethod
    def all() -> List["Direction"]:
        return [Direction.SOUTH, Direction.EAST, Direction.NORTH, Direction.WEST]

    def __str__(self) -> str:
        return self.name


class Tile(str, Enum):
    """The maze symbol alphabet."""
    WALL = "#"
    EMPTY = " "
    START = "@"
    BOOTH = "$"       # Terminal tile
    OBSTACLE = "X"    # Breakable in breaker mode
    BREAKER = "B"
    TELEPORT = "T"
    INVERTER = "I"
    SOUTH = "S"
    NORTH = "N"
    EAST = "E"
    WEST = "W"


TILE_SYMBOLS = frozenset(t.value for t in Tile)


class Position(NamedTuple):
    """A cell address: x is the column, y is the row."""
    x: int
    y: int

    def step(self, direction: Direction) -> "Position":
        dx, dy = direction.delta()
        return Position(self.x + dx, self.y + dy)


def count_open_states(plan: Sequence[str]) -> int:
    """
    Number of states inside the one-cell wall frame of a rectangular maze.

    Used as the loop threshold: (rows - 2) * (cols - 2).
    """
    rows = len(plan)
    cols = len(plan[0]) if rows else 0
    return max(rows - 2, 0) * max(cols - 2, 0)


# ---------------------------------------------------------------------------
# Transition events
# ---------------------------------------------------------------------------

@dataclass
class TransitionEvent:
    """One proposed move, alive for the duration of a single transition."""
    direction: Direction
    destination: Tile                  # Destination tile before any change
    coordinates: Position              # Destination coordinates
    args: Tuple[Any, ...] = ()         # Extra arguments given to transition()
    cancelled: bool = False
    _grid: Optional["GridFSM"] = field(default=None, repr=False, compare=False)

    def cancel(self) -> None:
        """Do not enter the destination. Only meaningful in ``before``."""
        self.cancelled = True

    def change_destination(self, tile: Tile) -> None:
        """Overwrite the destination tile in the grid."""
        self._grid.mutate_tile(self.coordinates, tile)

    def teleport(self) -> Position:
        """Jump to the teleport paired with the destination."""
        target = self._grid.teleport_destination(self.coordinates)
        self._grid.force_position(target)
        return target

    def unique_destination(self) -> str:
        """State id: destination symbol followed by its coordinates."""
        return f"{self.destination.value}{self.coordinates.x}{self.coordinates.y}"


Callback = Callable[[TransitionEvent], None]


def _noop(event: TransitionEvent) -> None:
    pass


# ---------------------------------------------------------------------------
# The state machine
# ---------------------------------------------------------------------------

class GridFSM:
    """
    A maze grid with a current position.

    The agent moves via transition(direction); callbacks decide what the
    destination tile does.
    """

    def __init__(self, plan: Sequence[str],
                 before: Optional[Callback] = None,
                 after: Optional[Callback] = None,
                 validate: bool = True):
        self._before = before or _noop
        self._after = after or _noop
        self._build_grid(plan, validate)

    def _build_grid(self, plan: Sequence[str], validate: bool) -> None:
        """Parse the plan into a character array and locate special tiles."""
        if not plan or not plan[0]:
            raise MazeFormatError("maze is empty")
        widths = {len(row) for row in plan}
        if len(widths) != 1:
            raise MazeFormatError(
                f"maze is not rectangular: row widths {sorted(widths)}")

        self.grid = np.array([list(row) for row in plan], dtype="<U1")

        if validate:
            unknown = {str(s) for s in np.unique(self.grid)} - TILE_SYMBOLS
            if unknown:
                raise MazeFormatError(
                    f"unknown tile symbols: {sorted(unknown)}")

        starts = np.argwhere(self.grid == Tile.START.value)
        if validate and len(starts) != 1:
            raise MazeFormatError(
                f"maze needs exactly one start tile, found {len(starts)}")

        teleports = np.argwhere(self.grid == Tile.TELEPORT.value)
        if validate and len(teleports) not in (0, 2):
            raise MazeFormatError(
                f"maze needs zero or two teleport tiles, found {len(teleports)}")

        # argwhere yields (row, col); positions are (col, row)
        self.position = (Position(int(starts[0][1]), int(starts[0][0]))
                         if len(starts) else Position(0, 0))
        self.teleports: List[Position] = [
            Position(int(c), int(r)) for r, c in teleports
        ]

    # --- Queries ---

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols)"""
        rows, cols = self.grid.shape
        return int(rows), int(cols)

    def in_bounds(self, position: Position) -> bool:
        rows, cols = self.shape
        return 0 <= position.x < cols and 0 <= position.y < rows

    def tile_at(self, position: Position) -> Tile:
        return Tile(str(self.grid[position.y, position.x]))

    def rows(self) -> List[str]:
        """Current maze text, including destroyed obstacles."""
        return ["".join(row) for row in self.grid]

    def render(self) -> str:
        """ASCII rendering with the agent drawn as 'A'."""
        lines = self.rows()
        x, y = self.position
        lines[y] = lines[y][:x] + "A" + lines[y][x + 1:]
        return "\n".join(lines)

    # --- Transitions ---

    def transition(self, direction: Direction, *args: Any) -> None:
        """
        Try to move one cell in the given direction.

        Raises OutOfBoundsError if the destination is off the grid; nothing
        is called and the position is unchanged in that case. A move
        cancelled by the ``before`` callback is not an error.
        """
        dst = self.position.step(direction)
        if not self.in_bounds(dst):
            raise OutOfBoundsError(f"unknown state {tuple(dst)}")

        event = TransitionEvent(
            direction=direction,
            destination=Tile(str(self.grid[dst.y, dst.x])),
            coordinates=dst,
            args=args,
            _grid=self,
        )

        self._before(event)
        if event.cancelled:
            return

        self.position = dst
        self._after(event)

    def mutate_tile(self, position: Position, tile: Tile) -> None:
        """Overwrite a single tile in place."""
        self.grid[position.y, position.x] = Tile(tile).value

    def force_position(self, position: Position) -> None:
        """Move without running callbacks."""
        self.position = Position(*position)

    def teleport_destination(self, source: Position) -> Position:
        """The teleport paired with ``source``."""
        if len(self.teleports) != 2:
            raise TeleportConfigError(
                f"teleports badly set up: expected 2, found {len(self.teleports)}")
        if self.teleports[0] == source:
            return self.teleports[1]
        return self.teleports[0]
