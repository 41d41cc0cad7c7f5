"""
Configuration System

User-level configuration for seedling. Features:
- Single-file YAML loading with environment resolution
- Built-in defaults merged beneath the user file
- ``.env`` loading from the working directory
- Dot-path access to nested values

The configuration file is optional. Its location is resolved in this order:

1. ``SEEDLING_CONFIG`` environment variable
2. ``$XDG_CONFIG_HOME/seedling/config.yml``
3. ``~/.config/seedling/config.yml``
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from seedling.errors import ConfigurationError

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

DEFAULT_CONFIG: dict[str, Any] = {
    "defaults": {
        "python_version": "3.12",
        "layout": "library",
        "features": ["github_actions", "pre_commit"],
        "author": "",
        "author_email": "",
        "license": "MIT",
    },
    "bootstrap": {
        "package_manager": "auto",
        "timeout": 600,
        "git": True,
        "install": True,
        "hooks": True,
        "run_tests": True,
    },
    "logging": {
        "level": "WARNING",
        "rich_tracebacks": True,
        "show_traceback_locals": False,
        "logging_colors": {
            "templates": "cyan",
            "bootstrap": "magenta",
            "check": "green",
        },
    },
    "cli": {
        "theme": "default",
    },
}

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def default_config_path() -> Path:
    """Return the path seedling reads its user configuration from."""
    explicit = os.environ.get("SEEDLING_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home).expanduser() if xdg_home else Path.home() / ".config"
    return base / "seedling" / "config.yml"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigBuilder:
    """
    Configuration builder for seedling's user settings.

    Features:
    - Optional YAML file, missing file means "defaults only"
    - Environment variable resolution in string values
    - Defaults merged beneath the user file so every documented key exists
    """

    # Sentinel object to distinguish between "no default provided" and "default is None"
    _REQUIRED = object()

    def __init__(self, config_path: str | Path | None = None, load_env: bool = True):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the config file. If None, uses :func:`default_config_path`.
            load_env: Load ``.env`` from the current working directory first.

        Raises:
            ConfigurationError: If the file exists but is not a YAML mapping.
        """
        if load_env:
            self._load_dotenv()

        self.config_path = Path(config_path) if config_path else default_config_path()
        self.user_config = self._load_yaml_file(self.config_path)
        self.raw_config = self._resolve_env_vars(_deep_merge(DEFAULT_CONFIG, self.user_config))

    @staticmethod
    def _load_dotenv() -> None:
        from dotenv import load_dotenv

        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)  # Don't override existing env vars
            logger.debug(f"Loaded .env file from {dotenv_path}")

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        if not file_path.exists():
            logger.debug(f"No configuration file at {file_path}, using defaults")
            return {}

        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML configuration {file_path}: {e}") from e

        if config is None:
            logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a dictionary/mapping: {file_path}"
            )

        logger.debug(f"Loaded configuration from {file_path}")
        return config

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:  # $VAR_NAME
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.debug(f"Environment variable '{var_name}' not found, keeping original value")
                    return match.group(0)
                return env_value

            return _ENV_PATTERN.sub(replace_env_var, data)
        else:
            return data

    def require(self, path: str, default: Any = _REQUIRED) -> Any:
        """Get a configuration value, failing if it is missing and has no default.

        Raises:
            ConfigurationError: If the value is missing and no default was given
        """
        value = self.get(path)
        if value is None:
            if default is self._REQUIRED:
                raise ConfigurationError(f"Missing required configuration: '{path}'")
            return default
        return value

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        value = self.raw_config
        try:
            for key in path.split("."):
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the effective (merged) configuration."""
        return copy.deepcopy(self.raw_config)


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None


def get_config(config_path: str | Path | None = None) -> ConfigBuilder:
    """Get the configuration instance.

    Without an explicit path the default instance is created once and cached.
    An explicit path always loads a fresh builder.
    """
    global _default_config

    if config_path is not None:
        return ConfigBuilder(config_path)

    if _default_config is None:
        _default_config = ConfigBuilder()
    return _default_config


def reset_config() -> None:
    """Drop the cached default configuration (used by tests and ``config`` commands)."""
    global _default_config
    _default_config = None


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "bootstrap.timeout")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> timeout = get_config_value("bootstrap.timeout", 600)
        >>> layout = get_config_value("defaults.layout", "library")
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return get_config(config_path).get(path, default)
