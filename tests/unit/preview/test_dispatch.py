"""Tests for preview classification and downgrade behavior."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from quickswitch.entries import KIND_DIRECTORY, KIND_FILE, KIND_SYMLINK, Entry
from quickswitch.preview import (
    PREVIEW_DIRECTORY,
    PREVIEW_DOCUMENT,
    PREVIEW_IMAGE,
    PREVIEW_MISSING,
    PREVIEW_TEXT,
    BinaryInfo,
    DirectorySummary,
    ImageRender,
    PreviewOptions,
    TextExcerpt,
    build_preview,
    classify_path,
    is_heavy_preview,
    preview_note,
)


def _file_entry(path: Path) -> Entry:
    return Entry(name=path.name, path=path, kind=KIND_FILE)


class ClassifyPathTests(unittest.TestCase):
    def test_classification_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "doc.pdf").write_bytes(b"%PDF-1.4")
            (root / "pic.png").write_bytes(b"")
            (root / "notes.txt").write_text("x", encoding="utf-8")
            (root / "sub").mkdir()

            self.assertEqual(classify_path(root / "sub"), PREVIEW_DIRECTORY)
            self.assertEqual(classify_path(root / "doc.pdf"), PREVIEW_DOCUMENT)
            self.assertEqual(classify_path(root / "pic.png"), PREVIEW_IMAGE)
            self.assertEqual(classify_path(root / "notes.txt"), PREVIEW_TEXT)
            self.assertEqual(classify_path(root / "nope"), PREVIEW_MISSING)

    def test_heavy_previews_are_images_and_documents(self) -> None:
        self.assertTrue(is_heavy_preview(_file_entry(Path("/x/a.png"))))
        self.assertTrue(is_heavy_preview(_file_entry(Path("/x/a.pdf"))))
        self.assertFalse(is_heavy_preview(_file_entry(Path("/x/a.txt"))))
        self.assertFalse(is_heavy_preview(Entry(name="pics.png", path=Path("/x/pics.png"), kind=KIND_DIRECTORY)))


class BuildPreviewTests(unittest.TestCase):
    def test_text_file_gives_plain_excerpt_without_color(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_text("first\nsecond\n", encoding="utf-8")

            payload = build_preview(_file_entry(path), PreviewOptions(colorize=False))

            self.assertIsInstance(payload, TextExcerpt)
            self.assertEqual(payload.lines, ((1, "first"), (2, "second")))
            self.assertIsNone(payload.highlighted)
            self.assertFalse(payload.truncated)

    def test_text_file_is_highlighted_when_colorized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "mod.py"
            path.write_text("import os\n", encoding="utf-8")

            payload = build_preview(_file_entry(path), PreviewOptions(colorize=True))

            self.assertIsInstance(payload, TextExcerpt)
            self.assertIsNotNone(payload.highlighted)
            self.assertEqual(len(payload.highlighted), 1)

    def test_directory_gives_summary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "child").mkdir()
            payload = build_preview(Entry(name=root.name, path=root, kind=KIND_DIRECTORY))
            self.assertIsInstance(payload, DirectorySummary)
            self.assertEqual(payload.names, ("child/",))

    def test_binary_file_gives_size_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.bin"
            path.write_bytes(b"\x00" * 10)

            payload = build_preview(_file_entry(path))

            self.assertIsInstance(payload, BinaryInfo)
            self.assertEqual(payload.size, 10)
            self.assertIsNone(preview_note(payload))

    def test_image_file_gives_render(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "green.png"
            Image.new("RGB", (8, 8), (0, 255, 0)).save(path)

            payload = build_preview(_file_entry(path))

            self.assertIsInstance(payload, ImageRender)
            self.assertEqual(payload.pixel(0, 0), (0, 255, 0))

    def test_corrupt_image_downgrades_with_note(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.png"
            path.write_bytes(b"garbage")

            payload = build_preview(_file_entry(path))

            self.assertIsInstance(payload, BinaryInfo)
            self.assertEqual(payload.size, 7)
            self.assertIn("image decode failed", preview_note(payload))

    def test_corrupt_pdf_downgrades_with_note(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.pdf"
            path.write_bytes(b"not a pdf")

            payload = build_preview(_file_entry(path))

            self.assertIsInstance(payload, BinaryInfo)
            self.assertIn("document extraction failed", preview_note(payload))

    def test_broken_symlink_downgrades(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            link = Path(tmp) / "dangling"
            try:
                os.symlink(Path(tmp) / "missing", link)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable")

            payload = build_preview(Entry(name="dangling", path=link, kind=KIND_SYMLINK))

            self.assertIsInstance(payload, BinaryInfo)
            self.assertEqual(payload.note, "broken symlink")

    def test_vanished_file_downgrades(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            payload = build_preview(_file_entry(Path(tmp) / "gone.txt"))
            self.assertIsInstance(payload, BinaryInfo)
            self.assertEqual(payload.note, "not found")

    @unittest.skipIf(hasattr(os, "geteuid") and os.geteuid() == 0, "root ignores file permissions")
    def test_unreadable_file_downgrades_to_permission_note(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "secret.txt"
            path.write_text("hidden", encoding="utf-8")
            path.chmod(0)
            try:
                payload = build_preview(_file_entry(path))
            finally:
                path.chmod(0o600)

            self.assertIsInstance(payload, BinaryInfo)
            self.assertEqual(payload.note, "Permission denied")


if __name__ == "__main__":
    unittest.main()
