"""Domain models exchanged through the IoEffect port.

These are transient values and handles, never persisted. File metadata is a
snapshot taken at query time; an ``ExecStreamHandle`` wraps a live process.
"""

from __future__ import annotations

import stat as stat_module
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    import asyncio
    import os
    from collections.abc import AsyncIterator


class EntryType(StrEnum):
    """Type of a filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> EntryType:
        """Classify an ``st_mode`` value."""
        if stat_module.S_ISLNK(mode):
            return cls.SYMLINK
        if stat_module.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat_module.S_ISREG(mode):
            return cls.FILE
        return cls.OTHER


class FileMetadata(BaseModel):
    """Result of a metadata query on a filesystem entry.

    Attributes
    ----------
    path : str
        The path the query was made for, as given by the caller.
    size : int
        Size in bytes.
    mode : int
        Permission bits only (``stat.S_IMODE``), e.g. ``0o644``.
    entry_type : EntryType
        File, directory, symlink (only when symlinks are not followed) or other.
    modified_at : datetime
        Last content modification, UTC.
    accessed_at : datetime
        Last access, UTC.
    changed_at : datetime
        Last metadata change, UTC.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    size: int
    mode: int
    entry_type: EntryType
    modified_at: datetime
    accessed_at: datetime
    changed_at: datetime

    @classmethod
    def from_stat_result(cls, path: str | os.PathLike[str], result: os.stat_result) -> FileMetadata:
        """Build a snapshot from an ``os.stat_result``."""
        return cls(
            path=str(path),
            size=result.st_size,
            mode=stat_module.S_IMODE(result.st_mode),
            entry_type=EntryType.from_mode(result.st_mode),
            modified_at=datetime.fromtimestamp(result.st_mtime, tz=UTC),
            accessed_at=datetime.fromtimestamp(result.st_atime, tz=UTC),
            changed_at=datetime.fromtimestamp(result.st_ctime, tz=UTC),
        )

    def is_file(self) -> bool:
        return self.entry_type is EntryType.FILE

    def is_directory(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY

    def is_symlink(self) -> bool:
        return self.entry_type is EntryType.SYMLINK


class ExecResult(BaseModel):
    """Complete captured output of a process that has already exited."""

    model_config = ConfigDict(frozen=True)

    stdout: str
    stderr: str


class CommandOptions(BaseModel):
    """Execution configuration passed through to the process host.

    Nothing here is checked against the system: a ``cwd`` that does not
    exist, for example, surfaces as the host's own error at spawn time.

    Attributes
    ----------
    cwd : str | Path | None
        Working directory of the child. ``None`` inherits the caller's.
    env : dict[str, str] | None
        Complete environment of the child. ``None`` inherits the caller's.
        The mapping replaces the environment, it is not merged into it.
    shell : str | None
        Shell executable that interprets the command line. ``None`` uses the
        effect's configured shell, falling back to the host default
        (``/bin/sh``).
    encoding : str | None
        Encoding used to decode output. ``None`` uses the effect's default.
    """

    model_config = ConfigDict(frozen=True)

    cwd: str | Path | None = None
    env: dict[str, str] | None = None
    shell: str | None = None
    encoding: str | None = None


class GlobOptions(BaseModel):
    """Options for pattern expansion.

    Attributes
    ----------
    cwd : str | Path
        Base directory relative patterns are matched against. Results are
        relative to it unless ``absolute`` is set.
    recursive : bool
        Let ``**`` match any number of directories.
    dot : bool
        Let wildcards match names starting with a dot.
    nodir : bool
        Drop directories from the result.
    absolute : bool
        Return absolute paths.
    """

    model_config = ConfigDict(frozen=True)

    cwd: str | Path = "."
    recursive: bool = True
    dot: bool = False
    nodir: bool = False
    absolute: bool = False


@dataclass(frozen=True, slots=True)
class ExecStreamHandle:
    """Live view of a spawned process.

    The three members advance independently: either line stream can be read
    to the end, partially, or not at all without affecting the other, and
    ``exit_code`` can be awaited at any point. Each line stream is
    single-pass and owns its pipe.

    Nothing here terminates the process. Callers that need a deadline race
    ``exit_code`` against their own timer.

    Attributes
    ----------
    stdout_lines : AsyncIterator[str]
        Lines written to standard output, without terminators.
    stderr_lines : AsyncIterator[str]
        Lines written to standard error, without terminators.
    exit_code : asyncio.Future[int]
        Resolves once with the exit status when the process has closed.
        Negative values are the number of the signal that killed it.
    """

    stdout_lines: AsyncIterator[str]
    stderr_lines: AsyncIterator[str]
    exit_code: asyncio.Future[int]


__all__ = [
    "CommandOptions",
    "EntryType",
    "ExecResult",
    "ExecStreamHandle",
    "FileMetadata",
    "GlobOptions",
]
