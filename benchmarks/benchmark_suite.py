"""
Benchmark suite for Bender Sim.

Runs the agent on mazes of increasing size, measuring:
- Outcome (booth reached or loop detected)
- Path length and moves attempted
- Computational cost (time)

The large mazes are generated from a seeded numpy RNG: an open room with
random walls and obstacles scattered inside the frame, which exercises the
loop detector on mazes where the booth is often walled off.
"""

import time
from dataclasses import dataclass
from typing import Callable, List

import numpy as np

from bender_sim import simulate
from bender_sim.mazes import BUILTIN_MAZES


@dataclass
class BenchmarkMaze:
    """A benchmark problem: a maze and its expected outcome."""
    name: str
    build: Callable[[], List[str]]
    expect_loop: bool = False
    difficulty: str = "easy"  # easy, medium, hard


def random_maze(rows: int, cols: int, density: float = 0.2,
                seed: int = 42) -> List[str]:
    """Framed random maze with start in the top left, booth bottom right."""
    rng = np.random.default_rng(seed)
    grid = np.full((rows, cols), " ", dtype="<U1")
    grid[0, :] = grid[-1, :] = "#"
    grid[:, 0] = grid[:, -1] = "#"

    inner = grid[1:-1, 1:-1]
    mask = rng.random(inner.shape)
    inner[mask < density] = "#"
    inner[(mask >= density) & (mask < density * 1.25)] = "X"

    grid[1, 1] = "@"
    grid[-2, -2] = "$"
    return ["".join(row) for row in grid]


# ---------------------------------------------------------------------------
# Benchmark problems — ordered by difficulty
# ---------------------------------------------------------------------------

BENCHMARKS = [
    BenchmarkMaze(name, factory, expect_loop=(name == "breaker_loop"))
    for name, factory in BUILTIN_MAZES.items()
] + [
    BenchmarkMaze("random_20", lambda: random_maze(20, 20, seed=1),
                  difficulty="medium"),
    BenchmarkMaze("random_50", lambda: random_maze(50, 50, seed=2),
                  difficulty="medium"),
    BenchmarkMaze("random_100", lambda: random_maze(100, 100, seed=3),
                  difficulty="hard"),
    BenchmarkMaze("random_200_dense", lambda: random_maze(200, 200, 0.35, seed=4),
                  difficulty="hard"),
]


def run_benchmark(problem: BenchmarkMaze) -> dict:
    """Run a single benchmark maze."""
    plan = problem.build()

    t0 = time.time()
    result = simulate(plan)
    elapsed = time.time() - t0

    return {
        "name": problem.name,
        "difficulty": problem.difficulty,
        "size": f"{len(plan)}x{len(plan[0])}",
        "finished": result.finished,
        "looped": result.looped,
        "expected": (result.looped == problem.expect_loop
                     if problem.difficulty == "easy" else None),
        "steps": result.steps,
        "attempts": result.moves_attempted,
        "time_sec": elapsed,
    }


def run_all_benchmarks(verbose: bool = True):
    """Run all benchmark mazes and print a summary table."""
    print("=" * 80)
    print("  Bender Sim — Benchmark Suite")
    print("=" * 80)
    print()

    results = []
    for problem in BENCHMARKS:
        r = run_benchmark(problem)
        results.append(r)
        if verbose:
            outcome = "booth" if r["finished"] else "loop"
            status = {True: "✓", False: "✗", None: "-"}[r["expected"]]
            print(f"  [{r['difficulty']:6s}] {r['name']:18s} {r['size']:>8s}  "
                  f"{status} {outcome:5s} steps={r['steps']:6d}  "
                  f"attempts={r['attempts']:7d}  time={r['time_sec']:.3f}s")

    checked = [r for r in results if r["expected"] is not None]
    correct = sum(1 for r in checked if r["expected"])
    print()
    print("=" * 80)
    print(f"  Expected outcomes: {correct}/{len(checked)}")
    print(f"  Booth reached:     {sum(1 for r in results if r['finished'])}/{len(results)}")
    print("=" * 80)

    return results


if __name__ == "__main__":
    run_all_benchmarks()
