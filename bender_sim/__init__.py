"""
Bender Sim: a deterministic agent walking a maze to the suicide booth.

The maze is a finite state machine over grid cells; the agent reacts to
each transition through a pair of callbacks and records its path until it
reaches the booth or is proven to loop forever.
"""

from bender_sim.grid_fsm import (
    Direction,
    Tile,
    Position,
    TransitionEvent,
    GridFSM,
    count_open_states,
    MazeFormatError,
    OutOfBoundsError,
    TeleportConfigError,
)
from bender_sim.agent import LOOP, AgentConfig, BenderAgent
from bender_sim.simulator import SimulationResult, simulate
from bender_sim.mazes import BUILTIN_MAZES, load_plan, parse_plan

__version__ = "0.1.0"
__all__ = [
    "Direction",
    "Tile",
    "Position",
    "TransitionEvent",
    "GridFSM",
    "count_open_states",
    "MazeFormatError",
    "OutOfBoundsError",
    "TeleportConfigError",
    "LOOP",
    "AgentConfig",
    "BenderAgent",
    "SimulationResult",
    "simulate",
    "BUILTIN_MAZES",
    "load_plan",
    "parse_plan",
]
