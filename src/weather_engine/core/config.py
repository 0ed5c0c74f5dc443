"""
Configuration module for the weather decision command line shell.

Loads configuration from a JSON file and environment variables. The scoring
engine never reads this module; the shell turns it into AlgorithmConfig
overrides and logger settings.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

KNOWN_APPS = ("drying", "burning")

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "file": "",
    },
    "engine": {
        "default_app": "drying",
        "timezone": "Europe/London",
    },
    "algorithms": {},
}


class Config:
    """Configuration manager for the application shell."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. Only an explicitly requested file
                        has to exist.
        """
        self._explicit = config_file is not None or os.getenv("CONFIG_FILE") is not None
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file and merge it over the defaults."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self._explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration root must be an object: {self.config_file}")

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self.config.get(section), dict):
                self.config[section].update(values)
            else:
                self.config[section] = values

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("LOG_LEVEL"):
            self.config["logging"]["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("LOG_FILE") is not None:
            self.config["logging"]["file"] = os.getenv("LOG_FILE")

        if os.getenv("WEATHER_APP"):
            self.config["engine"]["default_app"] = os.getenv("WEATHER_APP")

        if os.getenv("WEATHER_TIMEZONE"):
            self.config["engine"]["timezone"] = os.getenv("WEATHER_TIMEZONE")

    def _validate_config(self) -> None:
        """Validate section shapes and enumerated values."""
        level = str(self.get("logging.level", "INFO")).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid logging level: {level}")

        app = self.get("engine.default_app")
        if app not in KNOWN_APPS:
            raise ValueError(
                f"Invalid engine.default_app '{app}'. Available: {', '.join(KNOWN_APPS)}"
            )

        algorithms = self.config.get("algorithms", {})
        if not isinstance(algorithms, dict):
            raise ValueError("algorithms section must be an object")

        bad = [name for name, value in algorithms.items() if not isinstance(value, dict)]
        if bad:
            raise ValueError(f"Algorithm overrides must be objects: {', '.join(bad)}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'engine.default_app')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self.config

        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return str(self.get("logging.level", "INFO")).upper()

    @property
    def log_file(self) -> str:
        """Get log file path (empty disables file logging)."""
        return self.get("logging.file", "")

    @property
    def default_app(self) -> str:
        """Get the application scored when none is requested."""
        return self.get("engine.default_app", "drying")

    @property
    def timezone(self) -> str:
        """Get timezone used for naive forecast timestamps."""
        return self.get("engine.timezone", "UTC")

    def algorithm_overrides(self, app: str) -> Dict[str, Any]:
        """
        Get AlgorithmConfig overrides for one application.

        Args:
            app: Application name ('drying' or 'burning')

        Returns:
            Dictionary with optional 'weights', 'thresholds' and 'features' keys
        """
        return copy.deepcopy(self.get(f"algorithms.{app}", {}))

    def __repr__(self) -> str:
        return f"Config(file={self.config_file}, app={self.default_app})"
