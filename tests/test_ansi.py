"""Tests for ANSI-aware clipping, padding and wrapping."""

from __future__ import annotations

import unittest

from makedash.render.ansi import (
    clip_ansi_line,
    display_width,
    pad_ansi_line,
    strip_ansi,
    wrap_ansi_line,
)


class AnsiShapingTests(unittest.TestCase):
    def test_strip_and_width_ignore_escapes(self) -> None:
        colored = "\033[1;31mab\033[0m"

        self.assertEqual(strip_ansi(colored), "ab")
        self.assertEqual(display_width(colored), 2)

    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(display_width("日本"), 4)

    def test_clip_keeps_leading_escape(self) -> None:
        self.assertEqual(clip_ansi_line("\033[31mhello\033[0m", 3), "\033[31mhel")
        self.assertEqual(clip_ansi_line("anything", 0), "")

    def test_clip_expands_tabs_and_drops_controls(self) -> None:
        self.assertEqual(clip_ansi_line("a\tb", 20), "a" + " " * 7 + "b")
        self.assertEqual(clip_ansi_line("a\rb\x07c", 10), "abc")

    def test_pad_resets_color_before_padding(self) -> None:
        self.assertEqual(pad_ansi_line("hi", 4), "hi  ")
        self.assertEqual(pad_ansi_line("\033[32mhi", 4), "\033[32mhi\033[0m  ")

    def test_wrap_by_display_columns(self) -> None:
        self.assertEqual(wrap_ansi_line("abcdefghij", 4), ["abcd", "efgh", "ij"])
        self.assertEqual(wrap_ansi_line("日本語", 4), ["日本", "語"])
        self.assertEqual(wrap_ansi_line("", 4), [""])
        self.assertEqual(wrap_ansi_line("abc", 0), [""])


if __name__ == "__main__":
    unittest.main()
