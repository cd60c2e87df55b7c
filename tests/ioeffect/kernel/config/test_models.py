"""Tests for configuration models."""

from __future__ import annotations

import dataclasses

import pytest

from ioeffect.kernel.config.models import IoEffectConfig, LoggingConfig
from ioeffect.kernel.exceptions import ConfigurationError


class TestLoggingConfig:
    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "structured"
        assert config.output_file is None

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="logging.level"):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="logging.format"):
            LoggingConfig(format="xml")  # type: ignore[arg-type]

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            LoggingConfig().level = "DEBUG"  # type: ignore[misc]


class TestIoEffectConfig:
    def test_defaults(self) -> None:
        config = IoEffectConfig()
        assert config.encoding == "utf-8"
        assert config.shell is None
        assert config.logging == LoggingConfig()

    def test_unknown_encoding_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            IoEffectConfig(encoding="utf-9")
        assert exc_info.value.component == "encoding"

    def test_blank_shell_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="shell"):
            IoEffectConfig(shell="  ")
