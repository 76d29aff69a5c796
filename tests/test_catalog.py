"""Makefile target-line grammar tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from makedash.catalog import load_catalog, parse_catalog, parse_target_line, sorted_target_names
from makedash.errors import DescriptorError


class ParseCatalogTests(unittest.TestCase):
    def test_recipe_and_special_lines_are_excluded(self) -> None:
        text = "build: compile the project\n\t@echo hi\n.PHONY: build\n"

        self.assertEqual(parse_catalog(text), {"build": "compile the project"})

    def test_phony_marker_anywhere_excludes_line(self) -> None:
        self.assertIsNone(parse_target_line("clean: PHONY remove artifacts"))

    def test_name_must_be_identifier_up_to_first_colon(self) -> None:
        self.assertEqual(parse_target_line("lint-all_2:  run linters  "), ("lint-all_2", "run linters"))
        self.assertIsNone(parse_target_line("my target: spaced"))
        self.assertIsNone(parse_target_line("%.o: %.c"))
        self.assertIsNone(parse_target_line("no colon here"))
        self.assertIsNone(parse_target_line("  indented: with spaces"))

    def test_doc_is_remainder_after_first_colon(self) -> None:
        self.assertEqual(parse_target_line("deploy: env: prod"), ("deploy", "env: prod"))
        self.assertEqual(parse_target_line("bare:"), ("bare", ""))

    def test_later_declaration_wins(self) -> None:
        catalog = parse_catalog(["test: first\n", "test: second\r\n"])

        self.assertEqual(catalog, {"test": "second"})

    def test_listing_order_is_lexicographic(self) -> None:
        catalog = parse_catalog("zeta: z\nalpha: a\nMid: m\nbeta: b\n")

        self.assertEqual(sorted_target_names(catalog), ["Mid", "alpha", "beta", "zeta"])


class LoadCatalogTests(unittest.TestCase):
    def test_load_reads_descriptor_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Makefile"
            path.write_text("test: run unit tests\n\tpytest\n", encoding="utf-8")

            self.assertEqual(load_catalog(path), {"test": "run unit tests"})

    def test_load_tolerates_latin1_descriptor(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Makefile"
            path.write_bytes("docs: build the caf\xe9 docs\n".encode("latin-1"))

            self.assertEqual(load_catalog(path), {"docs": "build the caf\xe9 docs"})

    def test_load_strips_utf8_byte_order_mark(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Makefile"
            path.write_bytes(b"\xef\xbb\xbfbuild: compile\ntest: run\n")

            self.assertEqual(load_catalog(path), {"build": "compile", "test": "run"})

    def test_missing_descriptor_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DescriptorError) as ctx:
                load_catalog(Path(tmp) / "Makefile")

        self.assertIn("Makefile", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
