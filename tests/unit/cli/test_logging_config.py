"""Tests for loguru configuration."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from loguru import logger

from quickswitch.logging_config import LOG_LEVEL_ENV, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        env = mock.patch.dict(os.environ)
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop(LOG_LEVEL_ENV, None)
        self.addCleanup(logger.remove)
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.log_file = Path(self._tmp.name) / "qs.log"

    def _contents(self) -> str:
        logger.remove()
        return self.log_file.read_text(encoding="utf-8") if self.log_file.exists() else ""

    def test_quiet_by_default(self) -> None:
        self.assertIsNone(configure_logging(0, self.log_file))
        logger.info("hidden")
        self.assertEqual(self._contents(), "")

    def test_verbosity_levels(self) -> None:
        self.assertEqual(configure_logging(1, self.log_file), self.log_file)
        logger.debug("debug line")
        logger.info("info line")
        contents = self._contents()
        self.assertIn("info line", contents)
        self.assertNotIn("debug line", contents)

        configure_logging(2, self.log_file)
        logger.debug("debug line")
        self.assertIn("debug line", self._contents())

    def test_environment_level_enables_logging(self) -> None:
        os.environ[LOG_LEVEL_ENV] = "debug"
        self.assertEqual(configure_logging(0, self.log_file), self.log_file)
        logger.debug("from env")
        self.assertIn("from env", self._contents())

    def test_unknown_environment_level_falls_back_to_info(self) -> None:
        os.environ[LOG_LEVEL_ENV] = "chatty"
        configure_logging(0, self.log_file)
        logger.debug("too low")
        contents = self._contents()
        self.assertIn("unknown log level", contents)
        self.assertNotIn("too low", contents)

    def test_default_log_file_is_created(self) -> None:
        path = configure_logging(3)
        self.addCleanup(lambda: path.unlink(missing_ok=True))
        self.assertTrue(path.name.startswith("qs-"))
        self.assertTrue(path.name.endswith(".log"))
        self.assertTrue(path.exists())


if __name__ == "__main__":
    unittest.main()
