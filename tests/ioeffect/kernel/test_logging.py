"""Tests for centralized logging configuration using Loguru."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from loguru import logger

import ioeffect.kernel.logging as logging_module
from ioeffect.kernel.logging import configure_logging, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Start every test unconfigured and drop the handlers it added."""
    logging_module._CURRENT_CONFIG = None
    yield
    configure_logging(level="WARNING", format="console", force_reconfigure=True)


def _own_handler_count() -> int:
    return len(logging_module._HANDLER_IDS)


class TestGetLogger:
    def test_returns_bound_logger(self) -> None:
        assert get_logger("test.module") is not None

    def test_caches_results(self) -> None:
        assert get_logger("test.cache") is get_logger("test.cache")

    def test_logs_through_loguru(self) -> None:
        records: list[str] = []
        handler_id = logger.add(records.append, level="DEBUG", format="{message}")
        try:
            configure_logging(level="DEBUG", format="console")
            get_logger("test.sink").debug("Spawned pid={pid}", pid=42)
        finally:
            logger.remove(handler_id)
        assert any("Spawned pid=42" in record for record in records)


class TestConfigureLogging:
    @pytest.mark.parametrize("log_format", ["console", "json", "structured", "rich"])
    def test_each_format_adds_one_handler(self, log_format: str) -> None:
        configure_logging(level="INFO", format=log_format)  # type: ignore[arg-type]
        assert _own_handler_count() == 1

    def test_is_idempotent(self) -> None:
        configure_logging(level="INFO", format="console")
        first = list(logging_module._HANDLER_IDS)
        configure_logging(level="INFO", format="console")
        assert logging_module._HANDLER_IDS == first

    def test_reconfigure_replaces_handlers(self) -> None:
        configure_logging(level="INFO", format="console")
        first = list(logging_module._HANDLER_IDS)
        configure_logging(level="DEBUG", format="console")
        assert logging_module._HANDLER_IDS != first
        assert _own_handler_count() == 1

    def test_output_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "ioeffect.log"
        configure_logging(level="INFO", format="console", output_file=log_file)

        get_logger("test.file").info("written to file")
        logger.complete()

        assert _own_handler_count() == 2
        assert "written to file" in log_file.read_text()

    def test_env_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IOEFFECT_LOG_LEVEL", "error")
        monkeypatch.setenv("IOEFFECT_LOG_FORMAT", "JSON")
        logging_module._ensure_configured()
        assert logging_module._CURRENT_CONFIG is not None
        assert logging_module._CURRENT_CONFIG["level"] == "ERROR"
        assert logging_module._CURRENT_CONFIG["format"] == "json"
