"""Tests for raw key decoding from a file descriptor."""

from __future__ import annotations

import os
import unittest

from quickswitch.input import reader
from quickswitch.input.reader import read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _keys(self, data: bytes, count: int) -> list[str]:
        os.write(self.write_fd, data)
        return [read_key(self.read_fd, timeout_ms=50) for _ in range(count)]

    def test_arrow_keys(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_paging_and_tilde_keys(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[5~\x1b[6~\x1b[3~\x1b[1~\x1b[4~", 5),
            ["PAGE_UP", "PAGE_DOWN", "DELETE", "HOME", "END"],
        )

    def test_modified_and_application_mode_arrows(self) -> None:
        self.assertEqual(self._keys(b"\x1b[1;5A\x1bOB", 2), ["UP", "DOWN"])

    def test_control_bytes(self) -> None:
        self.assertEqual(
            self._keys(b"\t\x7f\x08\x15\x03\r\n", 7),
            ["TAB", "BACKSPACE", "BACKSPACE", "CTRL_U", "CTRL_C", "ENTER_CR", "ENTER_LF"],
        )

    def test_printable_and_utf8_characters(self) -> None:
        self.assertEqual(self._keys("aé€/".encode("utf-8"), 4), ["a", "é", "€", "/"])

    def test_lone_escape(self) -> None:
        self.assertEqual(self._keys(b"\x1b", 1), ["ESC"])

    def test_escape_followed_by_other_byte_keeps_that_byte(self) -> None:
        self.assertEqual(self._keys(b"\x1bq", 2), ["ESC", "q"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

    def test_end_of_input_returns_empty_token(self) -> None:
        os.close(self.write_fd)
        self.write_fd = os.open(os.devnull, os.O_WRONLY)
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")


if __name__ == "__main__":
    unittest.main()
