"""
Configuration loading for qwk.

Sources, lowest to highest priority:
1. Built-in defaults (from the pydantic model)
2. ``~/.config/qwk/config.yaml``
3. ``QWK_*`` environment variables, optionally seeded from ``~/.config/qwk/.env``

HOME is mandatory; there is no sensible place to keep state without it.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError

from .models import QwkConfig
from ..utils.error_handling import ConfigurationError

ENV_PREFIX = "QWK_"

# Settings that may be overridden through QWK_* variables
OVERRIDABLE_SETTINGS = (
    "default_agent",
    "preview_width",
    "log_level",
    "verbose_logging",
    "log_file",
)

# Location values always come from the environment, never from settings files
LOCATION_SETTINGS = ("home", "config_dir", "shell")


class ConfigLoader:
    """
    Resolves a QwkConfig from the environment and optional settings files.

    The environment is passed in as a mapping so callers (and tests) decide
    what qwk sees; ``os.environ`` is only the default.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = dict(os.environ if environ is None else environ)

    def load_config(self, settings_path: Optional[Union[str, Path]] = None) -> QwkConfig:
        """
        Load and validate the configuration.

        Args:
            settings_path: Optional YAML settings file to use instead of
                ``config_dir/config.yaml``

        Returns:
            Validated QwkConfig instance

        Raises:
            ConfigurationError: If HOME is unset or a settings source is invalid
        """
        home = self.environ.get("HOME")
        if not home:
            raise ConfigurationError("HOME environment variable not set")

        try:
            base = QwkConfig(
                home=Path(home),
                config_dir=self.environ.get(ENV_PREFIX + "CONFIG_DIR") or None,
                shell=self.environ.get("SHELL") or None,
            )

            config_data: Dict[str, Any] = {}
            path = Path(settings_path) if settings_path else base.settings_file
            if path.exists():
                config_data.update(self._load_yaml_file(path))
            elif settings_path:
                raise ConfigurationError(f"Specified settings file not found: {settings_path}")

            config_data.update(self._collect_env(base.config_dir))
            config_data.update(home=base.home, config_dir=base.config_dir, shell=base.shell)

            return QwkConfig(**config_data)

        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {self._format_validation_error(e)}")

    def _collect_env(self, config_dir: Path) -> Dict[str, Any]:
        """Gather QWK_* overrides, seeding unset ones from config_dir/.env."""
        values: Dict[str, Optional[str]] = {}

        env_file = config_dir / ".env"
        if env_file.is_file():
            values.update(dotenv_values(env_file))
        values.update(self.environ)

        overrides = {}
        for setting in OVERRIDABLE_SETTINGS:
            raw = values.get(ENV_PREFIX + setting.upper())
            if raw:
                overrides[setting] = self._convert_env_value(raw)
        return overrides

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML settings file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read settings file {file_path}: {e}")

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {file_path} must contain a YAML mapping")

        return {key: value for key, value in data.items() if key not in LOCATION_SETTINGS}

    def _convert_env_value(self, value: str) -> Any:
        """Convert an environment variable string to bool or int where it looks like one."""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            return value

    def _format_validation_error(self, error: ValidationError) -> str:
        """Format a pydantic validation error for display."""
        messages = []
        for err in error.errors():
            location = " -> ".join(str(loc) for loc in err['loc'])
            messages.append(f"{location}: {err['msg']} (got: {err.get('input', 'N/A')})")

        return "; ".join(messages)


def load_config(environ: Optional[Mapping[str, str]] = None,
                settings_path: Optional[Union[str, Path]] = None) -> QwkConfig:
    """
    Load configuration for one qwk invocation.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)
        settings_path: Optional path to a YAML settings file

    Returns:
        Validated QwkConfig instance

    Raises:
        ConfigurationError: If configuration loading fails
    """
    return ConfigLoader(environ).load_config(settings_path)
