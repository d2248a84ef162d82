"""
Configuration Manager - Settings file location and runtime preferences.

Handles YAML/JSON configuration with environment variable overrides.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml
from dotenv import dotenv_values, find_dotenv
from loguru import logger


class ConfigManager:
    """
    Configuration manager for TinyClaw.

    Features:
    - Optional YAML/JSON configuration file
    - .env loading
    - Environment variable overrides
    - Default values
    """

    DEFAULT_CONFIG = {
        "app": {
            "name": "TinyClaw",
            "version": "0.1.0",
            "debug": False,
        },
        "paths": {
            "home": "~/.tinyclaw",
            "settings_file": None,
        },
        "docs": {
            "filename": "AGENTS.md",
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }

    ENV_MAPPINGS: Dict[str, tuple] = {
        "TINYCLAW_HOME": ("paths.home", str),
        "TINYCLAW_SETTINGS_FILE": ("paths.settings_file", str),
        "TINYCLAW_DOCS_FILENAME": ("docs.filename", str),
        "TINYCLAW_LOG_LEVEL": ("logging.level", lambda x: x.upper()),
        "TINYCLAW_DEBUG": ("app.debug", lambda x: x.lower() == "true"),
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to an optional configuration file
        """
        self._config_path = Path(config_path).expanduser() if config_path else None
        self._config: Dict[str, Any] = self._deep_copy(self.DEFAULT_CONFIG)
        self._loaded = False

    def load(self, *, use_dotenv: bool = True) -> "ConfigManager":
        """Load configuration from defaults, file and environment."""
        self._config = self._deep_copy(self.DEFAULT_CONFIG)

        if self._config_path is not None:
            if not self._config_path.exists():
                raise FileNotFoundError(f"Config file not found: {self._config_path}")
            content = self._config_path.read_text(encoding="utf-8")
            if self._config_path.suffix in [".yaml", ".yml"]:
                file_config = yaml.safe_load(content) or {}
            else:
                file_config = json.loads(content)
            if not isinstance(file_config, dict):
                raise ValueError(f"Config file must contain a mapping: {self._config_path}")
            self._deep_merge(self._config, file_config)
            logger.debug(f"Configuration loaded from {self._config_path}")

        env: Dict[str, Optional[str]] = {}
        if use_dotenv:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                env.update(dotenv_values(dotenv_path))
        env.update(os.environ)
        self._apply_env_overrides(env)

        self._loaded = True
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-notation key (e.g., "docs.filename")
            default: Default value if not found

        Returns:
            Configuration value
        """
        parts = key.split(".")
        value = self._config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Dot-notation key
            value: Value to set
        """
        parts = key.split(".")
        config = self._config

        for part in parts[:-1]:
            if not isinstance(config.get(part), dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

    @property
    def home(self) -> Path:
        return Path(str(self.get("paths.home") or "~/.tinyclaw")).expanduser()

    @property
    def settings_path(self) -> Path:
        """Effective settings file: explicit override, else <home>/settings.json."""
        explicit = self.get("paths.settings_file")
        if explicit:
            return Path(str(explicit)).expanduser()
        return self.home / "settings.json"

    @property
    def docs_filename(self) -> str:
        return str(self.get("docs.filename") or "AGENTS.md")

    @property
    def debug(self) -> bool:
        return bool(self.get("app.debug", False))

    def _apply_env_overrides(self, env: Dict[str, Optional[str]]) -> None:
        """Apply environment variable overrides (process env wins over .env)."""
        for env_var, (config_key, converter) in self.ENV_MAPPINGS.items():
            value = env.get(env_var)
            if value:
                self._set_converted(env_var, config_key, converter, value)

    def _set_converted(self, env_var: str, key: str, converter: Callable[[str], Any], value: str) -> None:
        try:
            self.set(key, converter(value))
        except ValueError as e:
            logger.warning(f"Failed to apply {env_var}: {e}")
            return
        logger.debug(f"Applied env override: {env_var}")

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Deep merge override into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _deep_copy(self, obj: Any) -> Any:
        """Deep copy a dictionary."""
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._deep_copy(item) for item in obj]
        return obj

    @property
    def all(self) -> Dict[str, Any]:
        """Get all configuration."""
        return self._deep_copy(self._config)
