"""Tests for the ``python -m territory layout`` command."""

from __future__ import annotations

import json
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from io import StringIO
from pathlib import Path

from territory.__main__ import build_parser, run_layout


class TestLayoutCommand(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        args = build_parser().parse_args(list(argv))
        out, err = StringIO(), StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = run_layout(args)
        return code, out.getvalue(), err.getvalue()

    def test_participant_list(self):
        src = self.tmp / "in.json"
        src.write_text(json.dumps([
            {"id": "A", "weight": 0.7},
            {"id": "B", "weight": 0.3},
        ]), encoding="utf-8")
        code, out, err = self._run(
            "layout", str(src), "--capacity", "100",
            "--strategy", "column_pack", "--report",
        )
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["tiles"]["B"]["x"], 2)
        self.assertIn("Total: 89/100", err)

    def test_config_in_file_and_out_path(self):
        src = self.tmp / "in.json"
        dst = self.tmp / "out.json"
        src.write_text(json.dumps({
            "participants": [{"id": "A", "weight": 0.7}, {"id": "B", "weight": 0.3}],
            "config": {"spiral": {"max_radius": 0}, "on_exhausted": "drop"},
        }), encoding="utf-8")
        code, out, _ = self._run(
            "layout", str(src), "--capacity", "100", "--out", str(dst),
        )
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertEqual(json.loads(dst.read_text(encoding="utf-8"))["dropped"], ["B"])

    def test_error_exit_code(self):
        src = self.tmp / "in.json"
        src.write_text(json.dumps([{"id": "A", "weight": -1}]), encoding="utf-8")
        code, _, err = self._run("layout", str(src))
        self.assertEqual(code, 1)
        self.assertIn("negative weight", err)


if __name__ == "__main__":
    unittest.main()
