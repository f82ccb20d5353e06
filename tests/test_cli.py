"""Tests for the ``python -m warehouse pack`` command."""

from __future__ import annotations

import io
import json
import unittest
from contextlib import redirect_stdout

from warehouse.__main__ import _pack


def _run(args: list[str]) -> tuple[int, str]:
    out = io.StringIO()
    with redirect_stdout(out):
        code = _pack(args)
    return code, out.getvalue()


class TestPackCommand(unittest.TestCase):

    def test_prints_summary(self):
        code, out = _run(["--seed", "3", "--width", "150", "--length", "150",
                          "--boxes", "3", "--min-side", "30", "--max-side", "30",
                          "--clearance", "5"])
        self.assertEqual(code, 0)
        summary = json.loads(out)
        self.assertEqual(summary["config"]["storage_width"], 150)
        self.assertEqual(summary["stats"]["total_boxes"], 3)
        self.assertIsNone(summary["stop_reason"])

    def test_malformed_integer_flag(self):
        code, out = _run(["--width", "wide"])
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Error: "))

    def test_malformed_float_flag(self):
        code, out = _run(["--time-budget", "soon"])
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Error: "))

    def test_invalid_config(self):
        code, out = _run(["--min-side", "60", "--max-side", "40"])
        self.assertEqual(code, 1)
        self.assertIn("max_side", out)


if __name__ == "__main__":
    unittest.main()
