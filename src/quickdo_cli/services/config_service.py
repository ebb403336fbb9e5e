"""Configuration service for quickdo.

This module provides the ConfigService class, the single source of truth
for configuration. It handles:

- Loading and saving config.json (created with defaults on first run)
- Dotted-key reads and writes for ``quickdo config get/set``
- Environment overrides for the API key and the task file
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from quickdo_cli.models.config_models import AppConfig, AssistantConfig

APP_NAME = "quickdo_cli"
API_KEY_ENV_VARS = ("QUICKDO_API_KEY", "OPENAI_API_KEY")
TASKS_FILE_ENV_VAR = "QUICKDO_TASKS_FILE"


class ConfigService:
    """Service for loading, saving and querying the application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_NAME))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, creating defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self):
        """Save the current configuration to disk."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))

            # May hold an API key
            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self):
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()

    # ------------------------------------------------------------------
    # Effective values (config file + environment)
    # ------------------------------------------------------------------

    @property
    def tasks_path(self) -> Path:
        """Location of the JSON task file."""
        override = os.environ.get(TASKS_FILE_ENV_VAR)
        if override:
            return Path(override).expanduser()
        if self.config.storage.tasks_file:
            return Path(self.config.storage.tasks_file).expanduser()
        return self.data_dir / "tasks.json"

    def assistant_config(self) -> AssistantConfig:
        """Assistant settings with an environment API key applied, if set."""
        assistant = self.config.assistant
        for name in API_KEY_ENV_VARS:
            value = os.environ.get(name, "").strip()
            if value:
                return assistant.model_copy(update={"api_key": value})
        return assistant

    # ------------------------------------------------------------------
    # Dotted-key access
    # ------------------------------------------------------------------

    def get_value(self, key: str) -> Any:
        """Read a setting such as ``assistant.model``.

        Raises:
            KeyError: Unknown key
        """
        node: Any = self.config.model_dump()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(f"Unknown config key: {key}")
            node = node[part]
        return node

    def set_value(self, key: str, value: str) -> Any:
        """Write a setting from its string form and save.

        Values are coerced by the config models, ``none``/``null`` clears an
        optional value and list settings take comma-separated items.

        Raises:
            KeyError: Unknown key
            ValueError: The value does not validate
        """
        current = self.get_value(key)
        if isinstance(current, dict):
            raise KeyError(f"'{key}' is a section, not a setting")

        parsed: Any = value
        if value.strip().lower() in ("none", "null"):
            parsed = None
        elif isinstance(current, list):
            parsed = [item.strip() for item in value.split(",") if item.strip()]

        data = self.config.model_dump()
        *parents, leaf = key.split(".")
        node = data
        for part in parents:
            node = node[part]
        node[leaf] = parsed

        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value}") from e
        self.save_config()
        return self.get_value(key)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
