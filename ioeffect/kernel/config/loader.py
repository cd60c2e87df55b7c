"""Configuration loader for ioeffect.

Supports two config sources:

1. **kind: Config YAML** or a standalone TOML file, loaded via explicit path
   or the ``IOEFFECT_CONFIG_PATH`` env var.
2. **pyproject.toml [tool.ioeffect]**: auto-discovery fallback.

``${VAR}`` placeholders in string values are substituted from the
environment, and ``IOEFFECT_*`` environment variables override file values.
"""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ioeffect.kernel.config.models import IoEffectConfig, LoggingConfig
from ioeffect.kernel.exceptions import ConfigurationError
from ioeffect.kernel.logging import get_logger

_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

# Environment variable -> LoggingConfig field, for boolean settings
_BOOL_LOG_ENV_VARS = {
    "IOEFFECT_LOG_COLOR": "use_color",
    "IOEFFECT_LOG_TIMESTAMP": "include_timestamp",
    "IOEFFECT_LOG_STDLIB_BRIDGE": "enable_stdlib_bridge",
    "IOEFFECT_LOG_BACKTRACE": "backtrace",
    "IOEFFECT_LOG_DIAGNOSE": "diagnose",
}

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = _TRUTHY_VALUES | _FALSY_VALUES
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> IoEffectConfig:
    """Cached configuration loader."""
    loader = ConfigLoader()
    return loader._load_and_parse(Path(path_str))


class ConfigLoader:
    """Loads and processes ioeffect configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(self, path: str | Path | None = None) -> IoEffectConfig:
        """Load configuration from YAML or TOML.

        Parameters
        ----------
        path : str | Path | None
            Path to config file. If None, searches using discovery order.

        Returns
        -------
        IoEffectConfig
            Parsed configuration with environment variables applied

        Raises
        ------
        FileNotFoundError
            If no configuration file can be found
        """
        config_path = self._find_config_file(path)
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> IoEffectConfig:
        logger.debug("Loading configuration from {path}", path=config_path)

        if config_path.suffix in (".yaml", ".yml"):
            return self._load_yaml_config(config_path)
        return self._load_toml_config(config_path)

    def _load_yaml_config(self, config_path: Path) -> IoEffectConfig:
        """Load and parse a ``kind: Config`` YAML file.

        Raises
        ------
        ConfigurationError
            If the YAML file is not a valid kind: Config manifest
        """
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                config_path.name, f"expected a mapping, got {type(data).__name__}"
            )

        kind = data.get("kind")
        if kind != "Config":
            raise ConfigurationError(
                config_path.name, f"YAML config must use 'kind: Config', got 'kind: {kind}'"
            )

        spec = data.get("spec", {})
        if not isinstance(spec, dict):
            raise ConfigurationError(config_path.name, "'spec' must be a mapping")

        return self._parse_config(self._substitute_env_vars(spec))

    def _load_toml_config(self, config_path: Path) -> IoEffectConfig:
        with config_path.open("rb") as f:
            data = tomllib.load(f)

        if config_path.name == "pyproject.toml":
            section = data.get("tool", {}).get("ioeffect", {})
            if not section:
                logger.debug("No [tool.ioeffect] section in pyproject.toml, using defaults")
        elif "tool" in data and "ioeffect" in data.get("tool", {}):
            section = data["tool"]["ioeffect"]
        else:
            section = data

        return self._parse_config(self._substitute_env_vars(section))

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``IOEFFECT_CONFIG_PATH`` env var
        3. ``pyproject.toml`` in CWD
        4. ``pyproject.toml`` with ``[tool.ioeffect]`` in parent directories
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("IOEFFECT_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from IOEFFECT_CONFIG_PATH: {}", config_path)
                return config_path
            logger.warning("IOEFFECT_CONFIG_PATH set but file not found: {}", config_path)

        if Path("pyproject.toml").exists():
            return Path("pyproject.toml")

        current = Path.cwd()
        while current != current.parent:
            pyproject = current / "pyproject.toml"
            if pyproject.exists():
                with pyproject.open("rb") as f:
                    data = tomllib.load(f)
                if "ioeffect" in data.get("tool", {}):
                    return pyproject
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Provide a config path, set "
            "IOEFFECT_CONFIG_PATH, or add [tool.ioeffect] to pyproject.toml"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` placeholders; unknown vars are kept as-is."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                value = os.environ.get(match.group(1))
                return match.group(0) if value is None else value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> IoEffectConfig:
        """Parse format-agnostic configuration data, applying env overrides."""
        encoding = os.getenv("IOEFFECT_ENCODING") or data.get("encoding", "utf-8")
        shell = os.getenv("IOEFFECT_SHELL") or data.get("shell")
        return IoEffectConfig(
            encoding=encoding,
            shell=shell,
            logging=self._parse_logging_config(data.get("logging", {})),
        )

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over config file values:
        - IOEFFECT_LOG_LEVEL: Log level
        - IOEFFECT_LOG_FORMAT: Output format (console, json, structured, rich)
        - IOEFFECT_LOG_FILE: Optional file path for log output
        - IOEFFECT_LOG_COLOR, IOEFFECT_LOG_TIMESTAMP, IOEFFECT_LOG_STDLIB_BRIDGE,
          IOEFFECT_LOG_BACKTRACE, IOEFFECT_LOG_DIAGNOSE: booleans
        """
        values: dict[str, Any] = {
            key: logging_data[key]
            for key in LoggingConfig.__dataclass_fields__
            if key in logging_data
        }

        if env_level := os.getenv("IOEFFECT_LOG_LEVEL"):
            values["level"] = env_level.upper()
        if env_format := os.getenv("IOEFFECT_LOG_FORMAT"):
            values["format"] = env_format.lower()
        if env_file := os.getenv("IOEFFECT_LOG_FILE"):
            values["output_file"] = env_file

        for env_var, field_name in _BOOL_LOG_ENV_VARS.items():
            if env_value := os.getenv(env_var):
                try:
                    values[field_name] = _parse_bool_env(env_value)
                except ValueError as e:
                    logger.warning("Invalid {} value: {}", env_var, e)

        if "level" in values:
            values["level"] = str(values["level"]).upper()
        return LoggingConfig(**values)


def load_config(path: str | Path | None = None) -> IoEffectConfig:
    """Load configuration from file or return defaults.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search

    Returns
    -------
    IoEffectConfig
        Loaded configuration, or defaults (with env overrides) if no file is found
    """
    loader = ConfigLoader()
    try:
        return loader.load_config_file(path)
    except FileNotFoundError:
        logger.debug("No configuration file found, using defaults")
        return loader._parse_config({})


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when configuration files have been modified.
    """
    _load_and_parse_cached.cache_clear()


__all__ = ["ConfigLoader", "clear_config_cache", "load_config"]
