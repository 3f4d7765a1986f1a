"""Tests for the bender-sim command line."""

import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from bender_sim.cli import main


def run_cli(*argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):

    def test_builtin_maze(self):
        code, out, _ = run_cli("--maze", "teleport")
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "Plan:")
        self.assertEqual(lines[-2:], ["SOUTH", "EAST"])

    def test_default_maze(self):
        code, out, _ = run_cli()
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[-1], "NORTH")

    def test_loop_prints_sentinel(self):
        code, out, _ = run_cli("--maze", "breaker_loop")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[-1], "LOOP")

    def test_list(self):
        code, out, _ = run_cli("--list")
        self.assertEqual(code, 0)
        self.assertIn("teleport", out.splitlines())

    def test_verbose_prints_summary(self):
        code, out, _ = run_cli("--maze", "inverter", "--verbose")
        self.assertEqual(code, 0)
        self.assertIn("Simulation Result", out)

    def test_priorities_option(self):
        code, out, _ = run_cli("--maze", "open_room", "--priorities", "E,S,N,W")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[9], "EAST")

    def test_bad_priorities(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--priorities", "S,S,N,W"])
            with self.assertRaises(SystemExit):
                main(["--priorities", "S,E,Q,W"])

    def test_maze_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "maze.txt"
            path.write_text("####\n#@$#\n####\n", encoding="utf-8")
            code, out, _ = run_cli(str(path))
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[-1], "EAST")

    def test_malformed_maze_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "maze.txt"
            path.write_text("#####\n#@T$#\n#####\n", encoding="utf-8")
            code, _, err = run_cli(str(path))
        self.assertEqual(code, 1)
        self.assertIn("teleport", err)

    def test_missing_file(self):
        code, _, err = run_cli("/nonexistent/maze.txt")
        self.assertEqual(code, 1)
        self.assertIn("Failed with error", err)

    def test_off_grid(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "maze.txt"
            path.write_text("@ $\n", encoding="utf-8")
            code, _, err = run_cli(str(path))
        self.assertEqual(code, 1)
        self.assertIn("unknown state", err)


if __name__ == "__main__":
    unittest.main()
