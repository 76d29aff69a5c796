"""File logging setup tests."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from makedash.logs import configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("makedash")
        saved = (list(self.logger.handlers), self.logger.level, self.logger.propagate)

        def restore() -> None:
            for handler in self.logger.handlers:
                if handler not in saved[0]:
                    handler.close()
            self.logger.handlers[:] = saved[0]
            self.logger.setLevel(saved[1])
            self.logger.propagate = saved[2]

        self.addCleanup(restore)

    def test_records_from_submodules_reach_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "makedash.log"

            handler = configure_logging(path, "INFO")
            logging.getLogger("makedash.runtime.runner").info("generation %d started", 3)
            logging.getLogger("makedash.runtime.runner").debug("not written")
            handler.flush()
            handler.close()

            text = path.read_text(encoding="utf-8")

        self.assertIn("INFO", text)
        self.assertIn("makedash.runtime.runner: generation 3 started", text)
        self.assertNotIn("not written", text)
        self.assertFalse(self.logger.propagate)

    def test_unwritable_location_falls_back_to_null_handler(self) -> None:
        with mock.patch("makedash.logs.logging.FileHandler", side_effect=PermissionError("denied")):
            with tempfile.TemporaryDirectory() as tmp:
                result = configure_logging(Path(tmp) / "makedash.log")

        self.assertIsNone(result)
        self.assertIsInstance(self.logger.handlers[-1], logging.NullHandler)


if __name__ == "__main__":
    unittest.main()
