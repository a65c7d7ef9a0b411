"""
Hierarchical configuration management.

Loads configuration from multiple sources with this precedence (highest wins):
    1. Environment variables (PREFIX_SECTION__KEY)
    2. Config file (YAML or JSON)
    3. Built-in defaults

Usage:
    config = Config(config_file="folio.yaml")

    config.get("content.dir")                # dot-notation access
    config.get("watcher.debounce_seconds")

    # FOLIO_WATCHER__DEBOUNCE_SECONDS=0.5 -> config["watcher"]["debounce_seconds"] = "0.5"
"""

import copy
import json
import os
from typing import Any

import yaml

from folio.core.exceptions import ConfigurationError

_DEFAULT_ENV_PREFIX = "FOLIO_"

_DEFAULTS: dict[str, Any] = {
    "content": {
        "dir": "content",
        "extensions": [".md"],
        "include_hidden": False,
        "markdown_extensions": ["fenced_code", "tables"],
    },
    "watcher": {
        "enabled": True,
        "debounce_seconds": 0.1,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8080,
        "static_dir": "static",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


class Config:
    """
    Central configuration manager.

    Loads and merges configuration from defaults, a config file, and
    environment variables. Env vars use double-underscore to denote nesting:
    FOLIO_CONTENT__DIR=posts -> config["content"]["dir"] = "posts"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: Path to YAML or JSON configuration file.
            env_prefix: Prefix for environment variable overrides.
            defaults: Additional default values to merge.
        """
        self.config_file = config_file
        self.env_prefix = env_prefix or ""
        self._extra_defaults = defaults or {}
        self.config_data: dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from all sources."""
        self.config_data = copy.deepcopy(_DEFAULTS)

        if self._extra_defaults:
            self._update_dict(self.config_data, self._extra_defaults)

        if self.config_file:
            if not os.path.exists(self.config_file):
                raise ConfigurationError(f"Config file not found: {self.config_file}")
            file_config = self._load_file(self.config_file)
            self._update_dict(self.config_data, file_config)

        # Env vars override everything
        self._load_from_env()

    @staticmethod
    def _load_file(path: str) -> dict[str, Any]:
        """Load a YAML or JSON config file."""
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path) as f:
                if ext in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                elif ext == ".json":
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unsupported config file type: {path}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _update_dict(self, target: dict, source: dict) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_env(self) -> None:
        """Override config values from environment variables."""
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            config_key = env_key[len(self.env_prefix) :].lower()
            key_parts = config_key.split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "content.dir", "server.port"
            default: Returned when key is not found.
        """
        parts = key_path.split(".")
        current = self.config_data
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, key_path: str, value: Any) -> None:
        """Set a config value by dot-notation path, creating intermediate dicts."""
        parts = key_path.split(".")
        current = self.config_data
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value


# Env vars always arrive as strings; these coerce them back to typed values.


def as_bool(value: Any, key: str = "") -> bool:
    """Coerce a config value to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
    if isinstance(value, int):
        return bool(value)
    raise ConfigurationError(f"Expected a boolean for {key or 'value'}, got {value!r}")


def as_float(value: Any, key: str = "") -> float:
    """Coerce a config value to float."""
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Expected a number for {key or 'value'}, got {value!r}") from None


def as_int(value: Any, key: str = "") -> int:
    """Coerce a config value to int."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Expected an integer for {key or 'value'}, got {value!r}") from None


def as_list(value: Any) -> list[str]:
    """Coerce a config value to a list of strings (comma-separated strings allowed)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value]
