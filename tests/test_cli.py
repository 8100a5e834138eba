#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line tests for *mapsub*.

Every test drives ``mapsub.cli.main`` in-process inside a temporary
directory; stdin/stdout are patched where the command streams.
"""
from __future__ import annotations

import io
import logging
import sys
import tempfile
import unittest
from pathlib import Path
from typing import List, Tuple
from unittest.mock import patch

PROJECT_SRC = Path(__file__).resolve().parents[1] / "src"
if str(PROJECT_SRC) not in sys.path:
    sys.path.insert(0, str(PROJECT_SRC))

from mapsub.cli import EXIT_INVALID, EXIT_IO, EXIT_OK, main  # noqa: E402

HOSTS_MAP = (
    "# hosts\n"
    "example.com=example-int.com\n"
    "api.example.com=next-api.example-int.com\n"
    "production=integration\n"
)
SAMPLE = "api.example.com serves the production site\n"
EXPECTED = "next-api.example-int.com serves the integration site\n"


def _run(args: List[str], stdin: str = "") -> Tuple[int, str]:
    """Run the CLI with *args*; return (exit code, captured stdout)."""
    out = io.StringIO()
    with patch("sys.stdin", io.StringIO(stdin)), patch("sys.stdout", out):
        code = main(args)
    return code, out.getvalue()


class CliBaseTest(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.mapping = self.write("hosts.map", HOSTS_MAP)
        self.input = self.write("site.txt", SAMPLE)

    def tearDown(self) -> None:
        self._td.cleanup()
        base = logging.getLogger("mapsub")
        for h in list(base.handlers):
            base.removeHandler(h)
        base.propagate = True

    def write(self, name: str, text: str) -> Path:
        p = self.root / name
        p.write_text(text, encoding="utf-8")
        return p


# --------------------------------------------------------------------------- #
#  apply                                                                      #
# --------------------------------------------------------------------------- #
class ApplyCommandTests(CliBaseTest):
    def test_stdin_to_stdout(self) -> None:
        code, out = _run(["apply", "-q", "-m", str(self.mapping)], stdin=SAMPLE)
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out, EXPECTED)

    def test_input_to_output_file(self) -> None:
        target = self.root / "out.txt"
        code, out = _run(["apply", "-q", "-m", str(self.mapping), "-i", str(self.input), "-o", str(target)])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out, "")
        self.assertEqual(target.read_text(encoding="utf-8"), EXPECTED)
        self.assertEqual(self.input.read_text(encoding="utf-8"), SAMPLE)

    def test_in_place(self) -> None:
        code, _ = _run(["apply", "-q", "-m", str(self.mapping), "-i", str(self.input), "--in-place"])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(self.input.read_text(encoding="utf-8"), EXPECTED)

    def test_in_place_requires_input(self) -> None:
        code, _ = _run(["apply", "-q", "-m", str(self.mapping), "--in-place"])
        self.assertEqual(code, EXIT_IO)

    def test_duplicate_keys_leave_files_untouched(self) -> None:
        bad = self.write("bad.map", "a=1\nb=2\na=3\nb=4\n")
        target = self.root / "out.txt"
        code, out = _run(["apply", "-q", "-m", str(bad), "-i", str(self.input), "-o", str(target)])
        self.assertEqual(code, EXIT_INVALID)
        self.assertEqual(out, "")
        self.assertFalse(target.exists())

        code, _ = _run(["apply", "-q", "-m", str(bad), "-i", str(self.input), "--in-place"])
        self.assertEqual(code, EXIT_INVALID)
        self.assertEqual(self.input.read_text(encoding="utf-8"), SAMPLE)

    def test_all_offending_keys_are_logged(self) -> None:
        bad = self.write("bad.map", "alpha=1\nbeta=2\nalpha=3\nbeta=4\n")
        with patch("mapsub.cli._configure_logging"), self.assertLogs("mapsub", level="ERROR") as cm:
            code, _ = _run(["apply", "-m", str(bad)], stdin="alpha")
        self.assertEqual(code, EXIT_INVALID)
        joined = "\n".join(cm.output)
        self.assertIn("DuplicateSearchKey", joined)
        self.assertIn("'alpha'", joined)
        self.assertIn("'beta'", joined)

    def test_empty_and_duplicate_keys_logged_together(self) -> None:
        bad = self.write("bad.map", "=gone\nalpha=1\nalpha=2\n=also gone\n")
        with patch("mapsub.cli._configure_logging"), self.assertLogs("mapsub", level="ERROR") as cm:
            code, out = _run(["apply", "-m", str(bad)], stdin="alpha")
        self.assertEqual((code, out), (EXIT_INVALID, ""))
        joined = "\n".join(cm.output)
        self.assertIn("EmptySearchKey+DuplicateSearchKey", joined)
        self.assertIn("entry #1 has an empty search value", joined)
        self.assertIn("entry #4 has an empty search value", joined)
        self.assertIn("'alpha'", joined)
        self.assertNotIn("''", joined)

    def test_swap_through_cli(self) -> None:
        swap = self.write("swap.tsv", "blue\tgreen\ngreen\tblue\n")
        code, out = _run(["apply", "-q", "-m", str(swap)], stdin="blue sky, green grass")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out, "green sky, blue grass")

    def test_reverse_restores_original(self) -> None:
        forward = self.root / "forward.txt"
        _run(["apply", "-q", "-m", str(self.mapping), "-i", str(self.input), "-o", str(forward)])
        code, out = _run(["apply", "-q", "--reverse", "-m", str(self.mapping), "-i", str(forward)])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out, SAMPLE)

    def test_reversible_rejects_duplicate_replace(self) -> None:
        lossy = self.write("lossy.map", "colour=color\ncolor=color2\nhue=color\n")
        code, _ = _run(["apply", "-q", "--reversible", "-m", str(lossy)], stdin="x")
        self.assertEqual(code, EXIT_INVALID)
        code, out = _run(["apply", "-q", "-m", str(lossy)], stdin="colour")
        self.assertEqual((code, out), (EXIT_OK, "color"))

    def test_reverse_with_deletion_cannot_be_inverted(self) -> None:
        deleting = self.write("del.map", "DEBUG=\n")
        code, _ = _run(["apply", "-q", "--reverse", "-m", str(deleting)], stdin="x")
        self.assertEqual(code, EXIT_INVALID)

    def test_report_logs_counts(self) -> None:
        with patch("mapsub.cli._configure_logging"), self.assertLogs("mapsub", level="INFO") as cm:
            code, _ = _run(["apply", "--report", "-m", str(self.mapping)], stdin=SAMPLE)
        self.assertEqual(code, EXIT_OK)
        self.assertTrue(any("total" in line for line in cm.output))

    def test_missing_mapping_file(self) -> None:
        code, _ = _run(["apply", "-q", "-m", str(self.root / "nope.map")], stdin="x")
        self.assertEqual(code, EXIT_IO)

    def test_malformed_mapping_file(self) -> None:
        broken = self.write("broken.map", "ok=1\nno delimiter here\n")
        code, _ = _run(["apply", "-q", "-m", str(broken)], stdin="x")
        self.assertEqual(code, EXIT_IO)

    def test_format_flag_overrides_suffix(self) -> None:
        as_json = self.write("hosts.map", '{"production": "integration"}')
        code, out = _run(["apply", "-q", "--format", "json", "-m", str(as_json)], stdin="production")
        self.assertEqual((code, out), (EXIT_OK, "integration"))

    def test_env_selects_format(self) -> None:
        as_csv = self.write("hosts.map", "production,integration\n")
        with patch.dict("os.environ", {"MAPSUB_MAPPING_FORMAT": "csv"}):
            code, out = _run(["apply", "-q", "-m", str(as_csv)], stdin="production")
        self.assertEqual((code, out), (EXIT_OK, "integration"))


# --------------------------------------------------------------------------- #
#  check / contexts                                                           #
# --------------------------------------------------------------------------- #
class CheckCommandTests(CliBaseTest):
    def test_valid_table(self) -> None:
        code, out = _run(["check", "-q", "-m", str(self.mapping)])
        self.assertEqual((code, out), (EXIT_OK, ""))

    def test_empty_search(self) -> None:
        bad = self.write("bad.map", "=x\n")
        code, _ = _run(["check", "-q", "-m", str(bad)])
        self.assertEqual(code, EXIT_INVALID)

    def test_reversible_mode(self) -> None:
        lossy = self.write("lossy.map", "a=x\nb=x\n")
        self.assertEqual(_run(["check", "-q", "-m", str(lossy)])[0], EXIT_OK)
        self.assertEqual(_run(["check", "-q", "--reversible", "-m", str(lossy)])[0], EXIT_INVALID)


class ContextsCommandTests(CliBaseTest):
    TEXT = "region = us-west-1; user = brutus\n"

    def test_fragment(self) -> None:
        code, out = _run(["contexts", "-q", "-f", "us"], stdin=self.TEXT)
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.splitlines(), ["us-west-1", "brutus"])

    def test_fragment_any_substring(self) -> None:
        code, out = _run(["contexts", "-q", "--any-substring", "-f", "us"], stdin=self.TEXT)
        self.assertEqual(out.splitlines(), ["us-west-1", "user", "brutus"])

    def test_survey_from_mapping(self) -> None:
        table = self.write("regions.map", "us=eu\nwest=east\n")
        text = self.write("regions.txt", self.TEXT)
        code, out = _run(["contexts", "-q", "-m", str(table), "-i", str(text)])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.splitlines(), ["us:", "    us-west-1", "    brutus", "west:", "    us-west-1"])

    def test_empty_fragment(self) -> None:
        code, _ = _run(["contexts", "-q", "-f", ""], stdin=self.TEXT)
        self.assertEqual(code, EXIT_INVALID)


if __name__ == "__main__":
    unittest.main()
