"""
Demo: Bender walks each of the built-in mazes.

Every maze shows one rule of the agent:
- walls turn it to its next priority direction
- a breaker lets it smash X obstacles
- teleports move it to the paired T tile
- an inverter reverses its priorities at the next wall
- path modifiers override the priorities until the next wall
- some mazes can never be solved, and the agent notices
"""

from bender_sim import GridFSM, simulate
from bender_sim.mazes import BUILTIN_MAZES


def main():
    print("=" * 60)
    print("  Bender Sim — Built-in Mazes")
    print("=" * 60)

    for name, factory in BUILTIN_MAZES.items():
        plan = factory()
        print(f"\n--- {name} ---\n")
        print("Grid:")
        print(GridFSM(plan).render())
        print()

        result = simulate(plan, verbose=True)
        print()
        print(result.summary())
        print(f"  Path: {' '.join(result.path)}")


if __name__ == "__main__":
    main()
