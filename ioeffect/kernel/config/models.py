"""Configuration data models for ioeffect."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from typing import Literal

from ioeffect.kernel.exceptions import ConfigurationError

_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_LOG_FORMATS = frozenset({"console", "json", "structured", "rich"})


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON records to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    enable_stdlib_bridge : bool, default=False
        Route stdlib logging through Loguru
    backtrace : bool, default=True
        Enable extended backtraces
    diagnose : bool, default=True
        Show variable values in tracebacks

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.ioeffect.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export IOEFFECT_LOG_LEVEL=DEBUG
    export IOEFFECT_LOG_FORMAT=json
    export IOEFFECT_LOG_FILE=/var/log/ioeffect.log
    ```
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True
    enable_stdlib_bridge: bool = False
    backtrace: bool = True
    diagnose: bool = True

    def __post_init__(self) -> None:
        """Validate level and format.

        Raises
        ------
        ConfigurationError
            If level or format is not one of the supported values
        """
        if self.level not in _LOG_LEVELS:
            raise ConfigurationError("logging.level", f"unknown level {self.level!r}")
        if self.format not in _LOG_FORMATS:
            raise ConfigurationError("logging.format", f"unknown format {self.format!r}")


@dataclass(frozen=True, slots=True)
class IoEffectConfig:
    """Complete ioeffect configuration.

    Attributes
    ----------
    encoding : str, default="utf-8"
        Text encoding for file contents and process output
    shell : str | None, default=None
        Shell executable for command lines; None uses the host default
    logging : LoggingConfig
        Logging configuration
    """

    encoding: str = "utf-8"
    shell: str | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError("encoding", f"unknown codec {self.encoding!r}") from e
        if self.shell is not None and not self.shell.strip():
            raise ConfigurationError("shell", "cannot be empty")


__all__ = ["IoEffectConfig", "LoggingConfig"]
