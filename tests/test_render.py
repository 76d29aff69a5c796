"""Frame composition tests."""

from __future__ import annotations

import os
import unittest

from makedash.layout import Rect
from makedash.render import bottom_border, build_frame, render_frame, top_border
from makedash.ui_theme import PLAIN_THEME
from makedash.views import View


class BorderTests(unittest.TestCase):
    def test_top_border_embeds_title(self) -> None:
        self.assertEqual(top_border("Makefile Targets", 24), "┌─ Makefile Targets ───┐")

    def test_top_border_without_title(self) -> None:
        self.assertEqual(top_border("", 5), "┌───┐")

    def test_top_border_clips_long_title(self) -> None:
        self.assertEqual(top_border("abcdefgh", 6), "┌─ ab┐")

    def test_bottom_border(self) -> None:
        self.assertEqual(bottom_border(5), "└───┘")


class BuildFrameTests(unittest.TestCase):
    def _targets_view(self) -> View:
        return View(
            name="targets",
            rect=Rect(0, 0, 9, 4),
            title="T",
            lines=["alpha", "beta"],
            cursor_row=1,
            highlight=True,
        )

    def test_frame_paints_rows_and_selection(self) -> None:
        frame = build_frame([self._targets_view()], 40, 20, focus="targets", theme=PLAIN_THEME)

        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertIn("\033[1;1H┌─ T ────┐", frame)
        self.assertIn("│alpha   │", frame)
        self.assertIn("│\033[7mbeta    \033[0m│", frame)
        self.assertIn("\033[5;1H└────────┘", frame)

    def test_rows_outside_terminal_are_skipped_and_clipped(self) -> None:
        view = View(name="output", rect=Rect(5, 0, 14, 4), lines=["0123456789"])

        frame = build_frame([view], 10, 3, theme=PLAIN_THEME)

        self.assertIn("\033[3;6H", frame)
        self.assertNotIn("\033[4;6H", frame)
        self.assertIn("\033[2;6H│0123", frame)
        self.assertNotIn("01234", frame)

    def test_view_starting_past_right_edge_is_omitted(self) -> None:
        view = View(name="output", rect=Rect(30, 0, 39, 4))

        self.assertEqual(build_frame([view], 20, 10, theme=PLAIN_THEME), "\033[H\033[J")

    def test_render_frame_writes_single_frame_to_fd(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            render_frame([self._targets_view()], 40, 20, theme=PLAIN_THEME, fd=write_fd)
            data = os.read(read_fd, 65536).decode("utf-8")
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertTrue(data.startswith("\033[H\033[J"))
        self.assertIn("│alpha   │", data)


if __name__ == "__main__":
    unittest.main()
