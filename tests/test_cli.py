"""CLI entrypoint behavior tests.

Verifies descriptor lookup in the working directory, settings hand-off and
how fatal startup errors are reported.
"""

from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from makedash import __version__, cli
from makedash.config import DashboardSettings
from makedash.errors import TerminalInitError


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("makedash.cli.configure_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def test_main_loads_makefile_from_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "Makefile").write_text("test: run unit tests\n\tpytest\n", encoding="utf-8")
            settings = DashboardSettings()
            with mock.patch("makedash.cli.load_settings", return_value=settings), mock.patch(
                "makedash.cli.run_dashboard"
            ) as run_dashboard:
                cli.main([], default_dir=root)

        run_dashboard.assert_called_once_with({"test": "run unit tests"}, settings, cwd=root)
        self.configure_logging.assert_called_once_with(cli.LOG_PATH, "WARNING")

    def test_configured_descriptor_name_is_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "GNUmakefile").write_text("docs: build docs\n", encoding="utf-8")
            settings = DashboardSettings(descriptor="GNUmakefile")
            with mock.patch("makedash.cli.load_settings", return_value=settings), mock.patch(
                "makedash.cli.run_dashboard"
            ) as run_dashboard:
                cli.main([], default_dir=root)

        self.assertEqual(run_dashboard.call_args.args[0], {"docs": "build docs"})

    def test_missing_makefile_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("makedash.cli.load_settings", return_value=DashboardSettings()), mock.patch(
                "makedash.cli.run_dashboard"
            ) as run_dashboard:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([], default_dir=Path(tmp))

        self.assertIn("Makefile", str(ctx.exception.code))
        run_dashboard.assert_not_called()

    def test_terminal_init_failure_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "Makefile").write_text("build: compile\n", encoding="utf-8")
            with mock.patch("makedash.cli.load_settings", return_value=DashboardSettings()), mock.patch(
                "makedash.cli.run_dashboard",
                side_effect=TerminalInitError("makedash needs an interactive terminal"),
            ):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([], default_dir=root)

        self.assertEqual(ctx.exception.code, "makedash: makedash needs an interactive terminal")

    def test_version_flag(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            cli.main(["--version"])

        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(out.getvalue().strip(), f"makedash {__version__}")


if __name__ == "__main__":
    unittest.main()
