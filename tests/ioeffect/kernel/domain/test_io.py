"""Tests for IoEffect domain models."""

from __future__ import annotations

import os
import stat
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from ioeffect.kernel.domain.io import (
    CommandOptions,
    EntryType,
    ExecResult,
    FileMetadata,
    GlobOptions,
)


class TestEntryType:
    def test_regular_file(self) -> None:
        assert EntryType.from_mode(stat.S_IFREG | 0o644) is EntryType.FILE

    def test_directory(self) -> None:
        assert EntryType.from_mode(stat.S_IFDIR | 0o755) is EntryType.DIRECTORY

    def test_symlink(self) -> None:
        assert EntryType.from_mode(stat.S_IFLNK | 0o777) is EntryType.SYMLINK

    def test_fifo_is_other(self) -> None:
        assert EntryType.from_mode(stat.S_IFIFO | 0o600) is EntryType.OTHER

    def test_string_values(self) -> None:
        assert EntryType.DIRECTORY == "directory"


class TestFileMetadata:
    def test_from_stat_result(self, tmp_path: Path) -> None:
        target = tmp_path / "data.txt"
        target.write_text("12345")
        target.chmod(0o640)

        metadata = FileMetadata.from_stat_result(target, os.stat(target))

        assert metadata.path == str(target)
        assert metadata.size == 5
        assert metadata.mode == 0o640
        assert metadata.is_file()
        assert not metadata.is_directory()
        assert metadata.modified_at.utcoffset() == timedelta(0)

    def test_directory_snapshot(self, tmp_path: Path) -> None:
        metadata = FileMetadata.from_stat_result(tmp_path, os.stat(tmp_path))
        assert metadata.is_directory()
        assert metadata.entry_type is EntryType.DIRECTORY

    def test_is_frozen(self) -> None:
        now = datetime.now(tz=UTC)
        metadata = FileMetadata(
            path="x",
            size=1,
            mode=0o644,
            entry_type=EntryType.FILE,
            modified_at=now,
            accessed_at=now,
            changed_at=now,
        )
        with pytest.raises(ValidationError):
            metadata.size = 2  # type: ignore[misc]


class TestExecResult:
    def test_fields(self) -> None:
        result = ExecResult(stdout="hello\n", stderr="")
        assert result.stdout == "hello\n"
        assert result.stderr == ""

    def test_equality(self) -> None:
        assert ExecResult(stdout="a", stderr="b") == ExecResult(stdout="a", stderr="b")


class TestCommandOptions:
    def test_defaults_inherit_everything(self) -> None:
        options = CommandOptions()
        assert options.cwd is None
        assert options.env is None
        assert options.shell is None
        assert options.encoding is None

    def test_cwd_is_not_checked(self) -> None:
        options = CommandOptions(cwd="/definitely/not/here")
        assert options.cwd == "/definitely/not/here"

    def test_accepts_path(self, tmp_path: Path) -> None:
        assert CommandOptions(cwd=tmp_path).cwd == tmp_path


class TestGlobOptions:
    def test_defaults(self) -> None:
        options = GlobOptions()
        assert options.cwd == "."
        assert options.recursive is True
        assert options.dot is False
        assert options.nodir is False
        assert options.absolute is False
