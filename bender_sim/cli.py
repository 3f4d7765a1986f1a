"""
Command line entry point: run Bender through a maze and print the path.

    bender-sim maze.txt
    bender-sim --maze teleport --verbose
    bender-sim --list
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from bender_sim.agent import AgentConfig
from bender_sim.grid_fsm import (
    Direction, MazeFormatError, OutOfBoundsError, TeleportConfigError,
)
from bender_sim.mazes import BUILTIN_MAZES, load_plan
from bender_sim.simulator import simulate


def _parse_priorities(text: str) -> List[Direction]:
    names = {d.name[0]: d for d in Direction.all()}
    names.update({d.name: d for d in Direction.all()})
    try:
        return [names[part.strip().upper()] for part in text.split(",")]
    except KeyError as exc:
        raise argparse.ArgumentTypeError(f"unknown direction {exc.args[0]!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bender-sim",
        description="Simulate Bender walking a maze to the suicide booth.",
    )
    parser.add_argument("maze_file", nargs="?",
                        help="Path to a maze text file")
    parser.add_argument("--maze", choices=sorted(BUILTIN_MAZES),
                        help="Use a built-in maze instead of a file")
    parser.add_argument("--threshold", type=int, default=None,
                        help="Loop threshold (default: states inside the frame)")
    parser.add_argument("--priorities", type=_parse_priorities, default=None,
                        help="Comma separated priority order, e.g. S,E,N,W")
    parser.add_argument("--breaker", action="store_true",
                        help="Start in breaker mode")
    parser.add_argument("--verbose", action="store_true",
                        help="Print every move")
    parser.add_argument("--list", action="store_true",
                        help="List built-in mazes and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name in sorted(BUILTIN_MAZES):
            print(name)
        return 0

    if args.maze_file and args.maze:
        parser.error("give either a maze file or --maze, not both")
    if not args.maze_file and not args.maze:
        args.maze = "open_room"

    try:
        config = AgentConfig(
            priorities=args.priorities or Direction.all(),
            start_in_breaker_mode=args.breaker,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        plan =load_plan(args.maze_file) if args.maze_file else BUILTIN_MAZES[args.maze]()

        print("Plan:")
        for row in plan:
            print(row)

        result = simulate(plan, config=config,
                          loop_threshold=args.threshold, verbose=args.verbose)
    except (OSError, MazeFormatError, OutOfBoundsError, TeleportConfigError) as exc:
        print(f"Failed with error: {exc}", file=sys.stderr)
        return 1

    for step in result.path:
        print(step)
    if args.verbose:
        print()
        print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
