"""
Bender — a deterministic agent that walks a maze by fixed priority rules.

The agent never looks at the grid directly. The GridFSM drives it through
two callbacks:

- before_transition: obstacles. A wall (or an X tile outside breaker
  mode) cancels the move, and the agent turns to its next priority.
- after_transition: tile effects. Path modifiers, the breaker, the
  inverter, teleports and the booth all act once the tile is entered.

Direction rules:
1. A path modifier (S/N/E/W tile) overrides the priorities until the
   next obstacle.
2. Otherwise the agent keeps going in the current priority direction.
3. On an obstacle it tries the next priority, cycling. After escaping an
   obstacle the next obstacle starts again from the top of the list.
4. An inverter tile arms a reversal of the priorities; the reversal only
   happens at the next obstacle.

Loop detection: each entered state (tile symbol + coordinates) is cached.
Revisiting states without finding a new one increments a counter; once it
exceeds the number of states in the maze the agent must be going round in
circles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from bender_sim.grid_fsm import Direction, Tile, TransitionEvent


LOOP = "LOOP"

PATH_MODIFIERS: Dict[Tile, Direction] = {
    Tile.SOUTH: Direction.SOUTH,
    Tile.NORTH: Direction.NORTH,
    Tile.EAST: Direction.EAST,
    Tile.WEST: Direction.WEST,
}


@dataclass
class AgentConfig:
    """Configuration for the Bender agent."""
    priorities: List[Direction] = field(default_factory=Direction.all)
    start_in_breaker_mode: bool = False

    def __post_init__(self):
        self.priorities = [Direction(d) for d in self.priorities]
        if sorted(self.priorities) != sorted(Direction.all()):
            raise ValueError(
                f"priorities must list each direction once, got "
                f"{[d.name for d in self.priorities]}")


class BenderAgent:
    """
    The agent's state and behavioural policy.

    ``loop_threshold`` is the number of states of the maze; see
    ``count_open_states``.
    """

    def __init__(self, loop_threshold: int,
                 config: Optional[AgentConfig] = None):
        self.config = config or AgentConfig()
        self.loop_threshold = loop_threshold

        self._priorities: List[Direction] = list(self.config.priorities)
        self._current = 0                    # Index into _priorities
        self._modifier: Optional[Direction] = None
        self._breaker = self.config.start_in_breaker_mode
        self._boom = False                   # Just hit an obstacle
        self._reset_direction = False        # Next turn starts from the top
        self._invert_pending = False
        self._done = False

        self._path: List[Direction] = []
        self._cache: Set[str] = set()
        self._loop_count = 0
        self._blocked_streak = 0            # Obstacles hit since the last move

        self.obstacles_hit = 0
        self.walls_destroyed = 0

    # --- State queries ---

    @property
    def done(self) -> bool:
        """True once the booth is reached."""
        return self._done

    @property
    def looped(self) -> bool:
        """True once an endless cycle is detected."""
        if self._blocked_streak > 2 * len(self._priorities):
            # Walled in on every side: no move will ever be committed
            return True
        return self._loop_count > self.loop_threshold

    @property
    def breaker(self) -> bool:
        return self._breaker

    @property
    def hurts(self) -> bool:
        """True while the agent is looking for a way past an obstacle."""
        return self._boom

    @property
    def priorities(self) -> List[Direction]:
        return list(self._priorities)

    @property
    def path(self) -> List[Direction]:
        return list(self._path)

    def direction(self) -> Direction:
        """The direction to follow next."""
        if self._modifier is not None:
            return self._modifier
        return self._priorities[self._current]

    def show_path(self) -> List[str]:
        """Recorded path as direction names, or [LOOP]."""
        if self.looped:
            return [LOOP]
        return [d.name for d in self._path]

    # --- State changes ---

    def next_direction(self) -> None:
        """Select the next priority after an obstacle."""
        if self._reset_direction:
            self._current = 0
            self._reset_direction = False
        else:
            self._current = (self._current + 1) % len(self._priorities)

    def boom(self) -> None:
        """An obstacle was hit."""
        self._boom = True
        self.obstacles_hit += 1
        self._modifier = None
        if self._invert_pending:
            self._turnover_priorities()
            self._reset_direction = True

    def back_on_track(self) -> None:
        """A move succeeded after an obstacle."""
        self._boom = False
        self._reset_direction = True

    def invert_breaker(self) -> None:
        self._breaker = not self._breaker

    def invert_priorities(self) -> None:
        """Arm (or disarm) the reversal applied at the next obstacle."""
        self._invert_pending = not self._invert_pending

    def _turnover_priorities(self) -> None:
        self._priorities.reverse()
        self._invert_pending = False

    def path_modifier(self, direction: Direction) -> None:
        self._modifier = direction

    def reached(self) -> None:
        self._done = True

    def remember(self, direction: Direction, state: str) -> None:
        """Record a committed move and check the state against the cache."""
        self._path.append(direction)
        self._blocked_streak = 0
        if state in self._cache:
            self._loop_count += 1
        else:
            self._cache.add(state)
            self._loop_count = 0

    # --- GridFSM callbacks ---

    def before_transition(self, event: TransitionEvent) -> None:
        """Handle obstacles before the destination is entered."""
        if event.destination == Tile.WALL:
            self._blocked(event)
        elif event.destination == Tile.OBSTACLE:
            if self._breaker:
                event.change_destination(Tile.EMPTY)
                self.walls_destroyed += 1
            else:
                self._blocked(event)

    def _blocked(self, event: TransitionEvent) -> None:
        self._blocked_streak += 1
        self.boom()
        self.next_direction()
        event.cancel()

    def after_transition(self, event: TransitionEvent) -> None:
        """Apply the effect of the tile just entered."""
        if self._boom:
            self.back_on_track()

        tile = event.destination
        if tile == Tile.BREAKER:
            self.invert_breaker()
        elif tile in PATH_MODIFIERS:
            self.path_modifier(PATH_MODIFIERS[tile])
        elif tile == Tile.INVERTER:
            self.invert_priorities()
        elif tile == Tile.TELEPORT:
            event.teleport()
        elif tile == Tile.BOOTH:
            self.reached()

        self.remember(event.direction, event.unique_destination())
