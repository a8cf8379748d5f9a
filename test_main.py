"""
CLI launcher tests.
"""

import contextlib
import io
import unittest
from pathlib import Path

import main

MAPS_DIR = Path(__file__).resolve().parent / "maps"


def run_cli(*argv: str):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main.main(["--log-level", "WARNING", *argv])
    return code, out.getvalue()


class TestCli(unittest.TestCase):
    def test_simulate(self) -> None:
        code, out = run_cli("simulate", str(MAPS_DIR / "sample.txt"))
        self.assertEqual(code, 0)
        self.assertIn("Score:      27730", out)
        self.assertIn("GOBLIN", out)

    def test_simulate_with_boost(self) -> None:
        code, out = run_cli("simulate", str(MAPS_DIR / "sample.txt"), "--boost", "12")
        self.assertEqual(code, 0)
        self.assertIn("Score:      4988", out)

    def test_boost(self) -> None:
        code, out = run_cli("boost", str(MAPS_DIR / "sample.txt"), "--start", "12")
        self.assertEqual(code, 0)
        self.assertIn("attack power 15", out)

    def test_boost_not_found(self) -> None:
        code, out = run_cli("boost", str(MAPS_DIR / "sample.txt"), "--max-boost", "2")
        self.assertEqual(code, 1)
        self.assertIn("No winning boost", out)

    def test_missing_map_file(self) -> None:
        code, _ = run_cli("simulate", str(MAPS_DIR / "does_not_exist.txt"))
        self.assertEqual(code, 2)

    def test_parser_requires_command(self) -> None:
        with self.assertRaises(SystemExit):
            main.build_parser().parse_args([])


if __name__ == "__main__":
    unittest.main()
