"""
Simulation driver — runs one agent through one maze.

    agent.direction() → grid.transition() → before/after callbacks → ...

until the agent reaches the booth or is proven to be looping. Stepping off
the grid raises OutOfBoundsError and aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from bender_sim.agent import AgentConfig, BenderAgent
from bender_sim.grid_fsm import GridFSM, Position, count_open_states


@dataclass
class SimulationResult:
    """Outcome of a single run."""
    finished: bool
    looped: bool
    path: List[str]              # Direction names, or ["LOOP"]
    moves_attempted: int
    obstacles_hit: int
    walls_destroyed: int
    final_position: Position
    loop_threshold: int

    @property
    def steps(self) -> int:
        """Committed moves; 0 when looped."""
        return 0 if self.looped else len(self.path)

    def summary(self) -> str:
        outcome = "Booth reached" if self.finished else (
            "Infinite loop" if self.looped else "Stopped")
        lines = [
            "═" * 45,
            "  Bender — Simulation Result",
            "═" * 45,
            f"  Outcome:           {outcome}",
            f"  Moves attempted:   {self.moves_attempted}",
            f"  Steps taken:       {self.steps}",
            f"  Obstacles hit:     {self.obstacles_hit}",
            f"  Walls destroyed:   {self.walls_destroyed}",
            f"  Final position:    ({self.final_position.x}, {self.final_position.y})",
            f"  Loop threshold:    {self.loop_threshold}",
            "═" * 45,
        ]
        return "\n".join(lines)


def simulate(plan: Sequence[str],
             config: Optional[AgentConfig] = None,
             loop_threshold: Optional[int] = None,
             verbose: bool = False) -> SimulationResult:
    """
    Walk the agent through ``plan`` until it finishes or loops.

    ``loop_threshold`` defaults to the number of states inside the maze
    frame.
    """
    if loop_threshold is None:
        loop_threshold = count_open_states(plan)

    agent = BenderAgent(loop_threshold, config)
    grid = GridFSM(plan, agent.before_transition, agent.after_transition)

    attempts = 0
    while not agent.done and not agent.looped:
        direction = agent.direction()
        steps_before = len(agent.path)
        grid.transition(direction)
        attempts += 1

        if verbose and len(agent.path) > steps_before:
            x, y = grid.position
            print(f"  [move {len(agent.path):4d}] {direction.name:5s} → "
                  f"({x}, {y})  breaker={'on' if agent.breaker else 'off'}  "
                  f"priorities={'/'.join(d.name[0] for d in agent.priorities)}")

    if verbose:
        status = "booth reached" if agent.done else "loop detected"
        print(f"  Stopped after {attempts} attempts: {status}.")

    return SimulationResult(
        finished=agent.done,
        looped=agent.looped,
        path=agent.show_path(),
        moves_attempted=attempts,
        obstacles_hit=agent.obstacles_hit,
        walls_destroyed=agent.walls_destroyed,
        final_position=grid.position,
        loop_threshold=loop_threshold,
    )
