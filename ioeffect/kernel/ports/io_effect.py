"""IoEffect port: every interaction with the outside world behind one interface.

Higher-level code that reads or writes files, queries metadata, runs
processes or expands glob patterns depends on :class:`IoEffect` only. The
production implementation talks to the operating system; tests pass an
in-memory fake instead.

Drivers
-------
- ``RealIoEffect``: operating-system backed (``ioeffect.drivers.io_effect``).
- ``MockIoEffect``: in-memory fake (``ioeffect.stdlib.adapters.mock``).

Contract notes
--------------
- All capabilities are coroutines except :meth:`IoEffect.glob_sync`.
- Failures reach the caller unchanged; nothing is retried or translated.
- There is no cancellation or timeout anywhere in this interface.
  Terminating a child process and enforcing deadlines are the caller's
  responsibility.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import os

    from ioeffect.kernel.domain.io import (
        CommandOptions,
        ExecResult,
        ExecStreamHandle,
        FileMetadata,
        GlobOptions,
    )


@runtime_checkable
class IoEffect(Protocol):
    """Capability set for filesystem and process access."""

    @abstractmethod
    async def astat(
        self, path: str | os.PathLike[str], *, follow_symlinks: bool = True
    ) -> FileMetadata:
        """Query metadata of an existing filesystem entry.

        Args
        ----
            path: Entry to query.
            follow_symlinks: Report the link target (the default) or the link
                itself.

        Returns
        -------
            Snapshot of the entry's metadata.

        Raises
        ------
        FileNotFoundError
            If the entry does not exist.
        PermissionError
            If the entry cannot be accessed.
        """
        ...

    @abstractmethod
    async def aread_file(self, path: str | os.PathLike[str]) -> str:
        """Read a whole file as text.

        Line endings are returned exactly as stored.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        UnicodeDecodeError
            If the content is not valid in the configured encoding.
        """
        ...

    @abstractmethod
    async def awrite_file(self, path: str | os.PathLike[str], content: str) -> None:
        """Create or overwrite a file with ``content``.

        The parent directory must already exist.

        Raises
        ------
        PermissionError
            If the file cannot be written.
        OSError
            ``ENOSPC`` when the device is full, ``ENOENT`` when the parent
            directory is missing.
        """
        ...

    @abstractmethod
    async def aexec(self, command: str, options: CommandOptions | None = None) -> ExecResult:
        """Run a shell command to completion and capture its output.

        Raises
        ------
        NonZeroExitError
            If the process exits with a non-zero status. The captured output
            is attached to the error.
        """
        ...

    @abstractmethod
    async def aexec_stream(
        self, command: str, options: CommandOptions | None = None
    ) -> ExecStreamHandle:
        """Spawn a shell command and stream its output line by line.

        Returns as soon as the process has been spawned. The handle's two
        line streams and its exit-code future can be consumed in any order
        or concurrently. A final output fragment without a line terminator
        is not emitted.

        A command the shell cannot find is not an error here: it looks like
        a process that exited immediately with a failure status. Callers must
        treat the exit code as the authoritative success signal.
        """
        ...

    @abstractmethod
    def glob_sync(self, pattern: str, options: GlobOptions | None = None) -> list[str]:
        """Expand a glob pattern against the filesystem.

        Args
        ----
            pattern: Glob pattern, e.g. ``src/**/*.py``.
            options: Base directory and matching flags. The base directory
                defaults to the current working directory.

        Returns
        -------
            Matching paths in traversal order (not sorted). Empty when
            nothing matches.

        Raises
        ------
        InvalidPatternError
            If the pattern is malformed.
        """
        ...


__all__ = ["IoEffect"]
