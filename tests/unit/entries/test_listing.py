"""Tests for the one-level directory lister."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from quickswitch.entries import KIND_DIRECTORY, KIND_FILE, KIND_SYMLINK, list_directory
from quickswitch.errors import NotADirectory, NotFound


class ListDirectoryTests(unittest.TestCase):
    def test_directories_sort_before_files_case_insensitively(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "apple.txt").write_text("a\n", encoding="utf-8")
            (root / "banana").mkdir()
            (root / "Avocado.md").write_text("b\n", encoding="utf-8")
            (root / "Zeta").mkdir()

            listing = list_directory(root)

            self.assertEqual([entry.name for entry in listing], ["banana", "Zeta", "apple.txt", "Avocado.md"])
            self.assertEqual(listing.directory, root)
            self.assertFalse(listing.truncated)

    def test_entries_carry_kind_size_and_absolute_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "notes.txt").write_text("hello", encoding="utf-8")
            (root / "sub").mkdir()

            listing = list_directory(root)
            by_name = {entry.name: entry for entry in listing}

            self.assertEqual(by_name["notes.txt"].kind, KIND_FILE)
            self.assertEqual(by_name["notes.txt"].size, 5)
            self.assertEqual(by_name["notes.txt"].path, root / "notes.txt")
            self.assertTrue(by_name["notes.txt"].path.is_absolute())
            self.assertIsNotNone(by_name["notes.txt"].mtime_ns)
            self.assertEqual(by_name["sub"].kind, KIND_DIRECTORY)
            self.assertIsNone(by_name["sub"].size)
            self.assertEqual(by_name["sub"].display_name, "sub/")

    def test_symlinks_are_reported_as_their_own_kind(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            target = root / "target"
            target.mkdir()
            loop = root / "loop"
            try:
                os.symlink(root, loop)
                os.symlink(target, root / "link")
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable")

            listing = list_directory(root)
            by_name = {entry.name: entry for entry in listing}

            self.assertEqual(by_name["loop"].kind, KIND_SYMLINK)
            self.assertEqual(by_name["link"].kind, KIND_SYMLINK)
            self.assertEqual(by_name["link"].display_name, "link@")
            # Symlinks are not directories, so they sort with files.
            self.assertEqual(listing[0].name, "target")

    def test_missing_directory_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "gone"
            with self.assertRaises(NotFound) as ctx:
                list_directory(missing)
            self.assertEqual(ctx.exception.path, missing)
            self.assertIn("gone", ctx.exception.status_text)

    def test_file_path_raises_not_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            file_path = Path(tmp) / "plain.txt"
            file_path.write_text("x", encoding="utf-8")
            with self.assertRaises(NotADirectory):
                list_directory(file_path)

    def test_max_entries_marks_listing_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for idx in range(12):
                (root / f"f{idx:02d}.txt").write_text("", encoding="utf-8")

            listing = list_directory(root, max_entries=5)

            self.assertEqual(len(listing), 5)
            self.assertTrue(listing.truncated)

    def test_truncated_listing_keeps_first_entries_in_sorted_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for idx in range(50):
                (root / f"f{idx:02d}.txt").write_text("", encoding="utf-8")
            for idx in range(5):
                (root / f"zdir{idx}").mkdir()

            listing = list_directory(root, max_entries=10)

            self.assertTrue(listing.truncated)
            self.assertEqual(
                [entry.name for entry in listing],
                ["zdir0", "zdir1", "zdir2", "zdir3", "zdir4", "f00.txt", "f01.txt", "f02.txt", "f03.txt", "f04.txt"],
            )
            self.assertTrue(all(entry.kind == KIND_DIRECTORY for entry in listing.entries[:5]))

    def test_empty_directory_lists_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            listing = list_directory(Path(tmp))
            self.assertEqual(len(listing), 0)
            self.assertEqual(list(listing), [])


if __name__ == "__main__":
    unittest.main()
