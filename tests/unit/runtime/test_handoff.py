"""Tests for writing the chosen directory back to the shell."""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from quickswitch.errors import IoFailure
from quickswitch.runtime.handoff import directory_for, write_handoff


class WriteHandoffTests(unittest.TestCase):
    def test_confirmed_path_is_sole_file_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "out"
            write_handoff(Path("/srv/projects"), output)
            self.assertEqual(output.read_text(encoding="utf-8"), "/srv/projects")

    def test_cancel_leaves_file_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "out"
            output.write_text("stale", encoding="utf-8")
            write_handoff(None, output)
            self.assertEqual(output.read_text(encoding="utf-8"), "")

    def test_without_output_file_prints_path(self) -> None:
        buffer = io.StringIO()
        with mock.patch("sys.stdout", buffer):
            write_handoff(Path("/srv"), None)
            write_handoff(None, None)
        self.assertEqual(buffer.getvalue(), "/srv\n")

    def test_write_failure_raises_io_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "missing-dir" / "out"
            with self.assertRaises(IoFailure) as ctx:
                write_handoff(Path("/srv"), output)
            self.assertEqual(ctx.exception.path, output)
            self.assertIn("Could not write output file", ctx.exception.status_text)


class DirectoryForTests(unittest.TestCase):
    def test_directory_is_returned_as_is(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(directory_for(Path(tmp)), Path(tmp))

    def test_file_maps_to_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            target.write_text("x", encoding="utf-8")
            self.assertEqual(directory_for(target), Path(tmp))

    def test_relative_path_is_made_absolute(self) -> None:
        self.assertTrue(directory_for(Path(".")).is_absolute())


if __name__ == "__main__":
    unittest.main()
