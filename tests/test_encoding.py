#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for tolerant query file reading.

Usage:
    python -m pytest tests/test_encoding.py -v
"""

from __future__ import annotations

import shutil
import sys
import tempfile
import unittest
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from gtranslate.utils.encoding import decode_bytes, read_text_safely  # noqa: E402


class TestEncoding(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp, ignore_errors=True)

    def test_utf8_with_bom(self):
        path = self.tmp / "bom.txt"
        path.write_bytes("\ufeffHallo %s".encode("utf-8"))
        self.assertEqual(read_text_safely(path), "Hallo %s")

    def test_plain_utf8(self):
        self.assertEqual(decode_bytes("Grüße".encode("utf-8")), "Grüße")

    def test_legacy_encoding_does_not_crash(self):
        text = decode_bytes("Les élèves sont arrivés à l'école".encode("latin-1"))
        self.assertTrue(text.startswith("Les "))
        self.assertIn("l'", text)

    def test_missing_file(self):
        self.assertIsNone(read_text_safely(self.tmp / "missing.txt"))


if __name__ == "__main__":
    unittest.main()
