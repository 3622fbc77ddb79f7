"""
Configuration Manager
====================

Settings for the translation client: dataclass defaults, an optional JSON
config file and GTRANSLATE_* environment overrides, applied in that order.
"""

import json
import logging
import os
import shlex
import shutil
import tempfile
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from gtranslate.core.constants import (
    DEFAULT_CONVERSIONS,
    DEFAULT_MARKER,
    GOOGLE_TRANSLATE_ENDPOINT,
    REQUEST_TIMEOUT,
    TOKEN_COMMAND,
)

ENV_PREFIX = "GTRANSLATE_"


class ConfigError(Exception):
    """Configuration file could not be read or holds invalid values."""


@dataclass
class TranslationSettings:
    """Translation-related settings."""
    endpoint: str = GOOGLE_TRANSLATE_ENDPOINT
    timeout: float = REQUEST_TIMEOUT
    token_command: List[str] = field(default_factory=lambda: list(TOKEN_COMMAND))
    # Island masking
    marker: str = DEFAULT_MARKER
    conversions: str = DEFAULT_CONVERSIONS


@dataclass
class LogSettings:
    """Logging settings. The level comes from --debug, not from here."""
    log_file: str = ""


class ConfigManager:
    """Loads and saves configuration."""

    def __init__(self, config_file: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.logger = logging.getLogger(__name__)
        self.config_file = Path(config_file) if config_file else None
        self.environ = os.environ if environ is None else environ

        # Default configuration
        self.translation_settings = TranslationSettings()
        self.log_settings = LogSettings()

        if self.config_file is not None:
            self.load_config()
        self.apply_env_overrides()
        self.validate()

    def _filter_config_data(self, dataclass_type, data):
        """Filter dictionary keys to match dataclass fields to avoid __init__ errors."""
        if not isinstance(data, dict):
            return {}
        valid_fields = {f.name for f in fields(dataclass_type)}
        unknown = set(data) - valid_fields
        if unknown:
            self.logger.warning(f"Ignoring unknown {dataclass_type.__name__} keys: {sorted(unknown)}")
        return {k: v for k, v in data.items() if k in valid_fields}

    def load_config(self) -> bool:
        """Load configuration from file. A missing file leaves the defaults."""
        if not self.config_file.exists():
            self.logger.debug(f"Config file {self.config_file} not found, using defaults")
            return False
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {self.config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_file} must contain a JSON object")

        try:
            self.translation_settings = TranslationSettings(
                **self._filter_config_data(TranslationSettings, data.get('translation_settings', {}))
            )
            self.log_settings = LogSettings(
                **self._filter_config_data(LogSettings, data.get('log_settings', {}))
            )
        except TypeError as e:
            raise ConfigError(f"Invalid settings in {self.config_file}: {e}") from e
        self.logger.debug(f"Configuration loaded from {self.config_file}")
        return True

    def apply_env_overrides(self):
        ts = self.translation_settings
        env = self.environ

        if env.get(f"{ENV_PREFIX}ENDPOINT"):
            ts.endpoint = env[f"{ENV_PREFIX}ENDPOINT"]
        if env.get(f"{ENV_PREFIX}TOKEN_COMMAND"):
            ts.token_command = shlex.split(env[f"{ENV_PREFIX}TOKEN_COMMAND"])
        if env.get(f"{ENV_PREFIX}MARKER"):
            ts.marker = env[f"{ENV_PREFIX}MARKER"]
        if env.get(f"{ENV_PREFIX}CONVERSIONS"):
            ts.conversions = env[f"{ENV_PREFIX}CONVERSIONS"]
        if env.get(f"{ENV_PREFIX}TIMEOUT"):
            try:
                ts.timeout = float(env[f"{ENV_PREFIX}TIMEOUT"])
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX}TIMEOUT must be a number, got {env[f'{ENV_PREFIX}TIMEOUT']!r}") from e
        if env.get(f"{ENV_PREFIX}LOG_FILE"):
            self.log_settings.log_file = env[f"{ENV_PREFIX}LOG_FILE"]

    def validate(self):
        ts = self.translation_settings
        if isinstance(ts.token_command, str):
            ts.token_command = shlex.split(ts.token_command)
        if not ts.token_command:
            raise ConfigError("token_command must not be empty")
        if not ts.marker:
            raise ConfigError("marker must not be empty")
        if not ts.conversions:
            raise ConfigError("conversions must name at least one character")
        try:
            ts.timeout = float(ts.timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"timeout must be a number, got {ts.timeout!r}") from e
        if ts.timeout <= 0:
            raise ConfigError("timeout must be positive")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'translation_settings': asdict(self.translation_settings),
            'log_settings': asdict(self.log_settings),
        }

    def save_config(self, path: Optional[str] = None) -> Path:
        """Write the current configuration (temp file + move)."""
        target = Path(path) if path else self.config_file
        if target is None:
            raise ConfigError("No config file path to save to")
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile('w', dir=str(target.parent.absolute()), delete=False,
                                         encoding='utf-8', suffix='.tmp') as tf:
            json.dump(self.to_dict(), tf, indent=4, ensure_ascii=False)
            temp_name = tf.name
        shutil.move(temp_name, str(target))
        self.logger.info(f"Configuration saved to {target}")
        return target
