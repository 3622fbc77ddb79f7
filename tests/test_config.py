#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for configuration loading, environment overrides and saving.

Usage:
    python -m pytest tests/test_config.py -v
"""

from __future__ import annotations

import json
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from gtranslate.core.constants import (  # noqa: E402
    DEFAULT_CONVERSIONS,
    DEFAULT_MARKER,
    GOOGLE_TRANSLATE_ENDPOINT,
    TOKEN_COMMAND,
)
from gtranslate.utils.config import ConfigError, ConfigManager  # noqa: E402


class TestConfigManager(unittest.TestCase):
    """Tests for ConfigManager."""

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp, ignore_errors=True)
        self.config_file = self.tmp / "config.json"

    def write_config(self, data):
        self.config_file.write_text(json.dumps(data), encoding="utf-8")

    def test_defaults_without_file(self):
        config = ConfigManager(environ={})
        ts = config.translation_settings
        self.assertEqual(ts.endpoint, GOOGLE_TRANSLATE_ENDPOINT)
        self.assertEqual(ts.token_command, TOKEN_COMMAND)
        self.assertEqual(ts.marker, DEFAULT_MARKER)
        self.assertEqual(ts.conversions, DEFAULT_CONVERSIONS)
        self.assertEqual(config.log_settings.log_file, "")

    def test_missing_file_keeps_defaults(self):
        config = ConfigManager(str(self.tmp / "nope.json"), environ={})
        self.assertEqual(config.translation_settings.marker, DEFAULT_MARKER)

    def test_loads_file_and_ignores_unknown_keys(self):
        self.write_config({
            "translation_settings": {"marker": "@@", "conversions": "sdf", "colour": "blue"},
            "log_settings": {"log_file": "run.log"},
        })
        config = ConfigManager(str(self.config_file), environ={})
        self.assertEqual(config.translation_settings.marker, "@@")
        self.assertEqual(config.translation_settings.conversions, "sdf")
        self.assertEqual(config.log_settings.log_file, "run.log")

    def test_token_command_string_is_split(self):
        self.write_config({"translation_settings": {"token_command": "gcloud auth print-access-token"}})
        config = ConfigManager(str(self.config_file), environ={})
        self.assertEqual(config.translation_settings.token_command, ["gcloud", "auth", "print-access-token"])

    def test_invalid_json(self):
        self.config_file.write_text("{broken", encoding="utf-8")
        with self.assertRaises(ConfigError):
            ConfigManager(str(self.config_file), environ={})

    def test_non_object_json(self):
        self.write_config(["not", "an", "object"])
        with self.assertRaises(ConfigError):
            ConfigManager(str(self.config_file), environ={})

    def test_invalid_values(self):
        for settings in ({"marker": ""}, {"timeout": 0}, {"timeout": "soon"}, {"conversions": ""}):
            with self.subTest(settings=settings):
                self.write_config({"translation_settings": settings})
                with self.assertRaises(ConfigError):
                    ConfigManager(str(self.config_file), environ={})

    def test_environment_overrides_file(self):
        self.write_config({"translation_settings": {"marker": "@@", "timeout": 10}})
        config = ConfigManager(str(self.config_file), environ={
            "GTRANSLATE_MARKER": "##",
            "GTRANSLATE_TIMEOUT": "5",
            "GTRANSLATE_ENDPOINT": "http://localhost:8080/v2",
            "GTRANSLATE_TOKEN_COMMAND": "print-token --quiet",
            "GTRANSLATE_LOG_FILE": "/tmp/gtranslate.log",
        })
        ts = config.translation_settings
        self.assertEqual(ts.marker, "##")
        self.assertEqual(ts.timeout, 5.0)
        self.assertEqual(ts.endpoint, "http://localhost:8080/v2")
        self.assertEqual(ts.token_command, ["print-token", "--quiet"])
        self.assertEqual(config.log_settings.log_file, "/tmp/gtranslate.log")

    def test_bad_timeout_override(self):
        with self.assertRaises(ConfigError):
            ConfigManager(environ={"GTRANSLATE_TIMEOUT": "fast"})

    def test_save_and_reload(self):
        config = ConfigManager(environ={"GTRANSLATE_MARKER": "%%"})
        saved = config.save_config(str(self.config_file))
        self.assertEqual(saved, self.config_file)

        reloaded = ConfigManager(str(self.config_file), environ={})
        self.assertEqual(reloaded.translation_settings.marker, "%%")
        self.assertEqual(reloaded.to_dict(), config.to_dict())

    def test_save_without_path(self):
        with self.assertRaises(ConfigError):
            ConfigManager(environ={}).save_config()


if __name__ == "__main__":
    unittest.main()
