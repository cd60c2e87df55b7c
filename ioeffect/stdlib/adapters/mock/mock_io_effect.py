"""In-memory IoEffect implementation for testing purposes."""

from __future__ import annotations

import asyncio
import fnmatch
import os
import posixpath
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from ioeffect.kernel.domain.io import (
    CommandOptions,
    EntryType,
    ExecResult,
    ExecStreamHandle,
    FileMetadata,
    GlobOptions,
)
from ioeffect.kernel.exceptions import InvalidPatternError, NonZeroExitError
from ioeffect.kernel.utils.line_split import split_lines

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class MockCommand:
    """Scripted outcome of a command."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0


@dataclass
class RecordedCall:
    """A recorded capability call for test assertions."""

    method: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


async def _single_chunk(data: bytes) -> AsyncIterator[bytes]:
    if data:
        yield data


def _globstar_variants(pattern: str) -> list[str]:
    """Return ``pattern`` plus each form where a ``**/`` segment matches no directory."""
    head, sep, tail = pattern.partition("**/")
    if not sep:
        return [pattern]
    rests = _globstar_variants(tail)
    if head and not head.endswith("/"):
        # "a**/" is an ordinary wildcard, not a whole-segment globstar
        return [head + sep + rest for rest in rests]
    return [head + sep + rest for rest in rests] + [head + rest for rest in rests]


class MockIoEffect:
    """In-memory IoEffect for testing.

    Files live in a dict, commands are scripted up front, and every call is
    recorded in :attr:`calls`. Directories are implied by the stored file
    paths. Errors mirror what the real driver raises, so code under test
    sees the same exception types.

    Parameters
    ----------
    files : dict[str, str] | None
        Initial file contents keyed by path.
    commands : dict[str, MockCommand] | None
        Outcomes keyed by the exact command line. Unknown commands behave
        like a shell that cannot find them (exit status 127).

    Examples
    --------
    Basic usage::

        io = MockIoEffect(
            files={"src/app.py": "print('hi')\\n"},
            commands={"pytest": MockCommand(stdout="1 passed\\n")},
        )
        assert await io.aread_file("src/app.py") == "print('hi')\\n"
        result = await io.aexec("pytest")
        assert result.stdout == "1 passed\\n"
        assert io.calls[-1].method == "aexec"
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        commands: dict[str, MockCommand] | None = None,
    ) -> None:
        self.calls: list[RecordedCall] = []
        self._commands = dict(commands or {})
        self._files: dict[str, str] = {}
        self._mtimes: dict[str, datetime] = {}
        for path, content in (files or {}).items():
            self._store(path, content)

    @property
    def files(self) -> dict[str, str]:
        """Copy of the current file contents."""
        return dict(self._files)

    def add_command(self, command: str, outcome: MockCommand) -> None:
        """Script the outcome of ``command``."""
        self._commands[command] = outcome

    @staticmethod
    def _normalize(path: str | os.PathLike[str]) -> str:
        return posixpath.normpath(os.fspath(path))

    def _store(self, path: str | os.PathLike[str], content: str) -> None:
        key = self._normalize(path)
        self._files[key] = content
        self._mtimes[key] = datetime.now(tz=UTC)

    def _is_directory(self, key: str) -> bool:
        prefix = "" if key == "." else key.rstrip("/") + "/"
        return any(name.startswith(prefix) for name in self._files)

    def _record(self, method: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append(RecordedCall(method=method, args=args, kwargs=kwargs))

    def _outcome(self, command: str) -> MockCommand:
        if command in self._commands:
            return self._commands[command]
        name = command.split()[0] if command.strip() else command
        return MockCommand(
            stderr=f"sh: 1: {name}: not found\n",
            exit_code=COMMAND_NOT_FOUND,
        )

    async def astat(
        self, path: str | os.PathLike[str], *, follow_symlinks: bool = True
    ) -> FileMetadata:
        self._record("astat", path, follow_symlinks=follow_symlinks)
        key = self._normalize(path)
        now = datetime.now(tz=UTC)
        if key in self._files:
            mtime = self._mtimes[key]
            return FileMetadata(
                path=str(path),
                size=len(self._files[key].encode()),
                mode=0o644,
                entry_type=EntryType.FILE,
                modified_at=mtime,
                accessed_at=now,
                changed_at=mtime,
            )
        if self._is_directory(key):
            return FileMetadata(
                path=str(path),
                size=0,
                mode=0o755,
                entry_type=EntryType.DIRECTORY,
                modified_at=now,
                accessed_at=now,
                changed_at=now,
            )
        raise FileNotFoundError(2, "No such file or directory", str(path))

    async def aread_file(self, path: str | os.PathLike[str]) -> str:
        self._record("aread_file", path)
        key = self._normalize(path)
        if key not in self._files:
            if self._is_directory(key):
                raise IsADirectoryError(21, "Is a directory", str(path))
            raise FileNotFoundError(2, "No such file or directory", str(path))
        return self._files[key]

    async def awrite_file(self, path: str | os.PathLike[str], content: str) -> None:
        self._record("awrite_file", path, content)
        key = self._normalize(path)
        if self._is_directory(key):
            raise IsADirectoryError(21, "Is a directory", str(path))
        parent = posixpath.dirname(key)
        if parent and parent not in (".", "/") and not self._is_directory(parent):
            raise FileNotFoundError(2, "No such file or directory", str(path))
        self._store(key, content)

    async def aexec(self, command: str, options: CommandOptions | None = None) -> ExecResult:
        self._record("aexec", command, options=options)
        outcome = self._outcome(command)
        if outcome.exit_code != 0:
            raise NonZeroExitError(
                command, outcome.exit_code, stdout=outcome.stdout, stderr=outcome.stderr
            )
        return ExecResult(stdout=outcome.stdout, stderr=outcome.stderr)

    async def aexec_stream(
        self, command: str, options: CommandOptions | None = None
    ) -> ExecStreamHandle:
        self._record("aexec_stream", command, options=options)
        outcome = self._outcome(command)
        encoding = (options.encoding if options else None) or "utf-8"

        exit_code: asyncio.Future[int] = asyncio.get_running_loop().create_future()
        exit_code.set_result(outcome.exit_code)
        return ExecStreamHandle(
            stdout_lines=split_lines(_single_chunk(outcome.stdout.encode(encoding)), encoding),
            stderr_lines=split_lines(_single_chunk(outcome.stderr.encode(encoding)), encoding),
            exit_code=exit_code,
        )

    def glob_sync(self, pattern: str, options: GlobOptions | None = None) -> list[str]:
        """Match stored file paths with :func:`fnmatch.fnmatchcase`.

        Unlike a real glob, ``*`` also matches ``/`` and directories are
        never returned. With ``recursive`` set, a ``**/`` segment may also
        match zero directories, so ``**/*.py`` finds top-level ``a.py`` as
        the real driver does. Without it, ``**`` is just another ``*``.
        With ``absolute`` set, paths come back as stored.
        """
        self._record("glob_sync", pattern, options=options)
        options = options or GlobOptions()
        if not pattern:
            raise InvalidPatternError(pattern, "pattern must not be empty")
        if "\x00" in pattern:
            raise InvalidPatternError(pattern, "pattern must not contain NUL characters")

        root = self._normalize(options.cwd)
        patterns = _globstar_variants(pattern) if options.recursive else [pattern]
        matches = []
        for key in self._files:
            relative = key if root == "." else posixpath.relpath(key, root)
            if relative.startswith(".."):
                continue
            if not options.dot and any(part.startswith(".") for part in relative.split("/")):
                continue
            if any(fnmatch.fnmatchcase(relative, candidate) for candidate in patterns):
                matches.append(key if options.absolute else relative)
        return matches


__all__ = ["COMMAND_NOT_FOUND", "MockCommand", "MockIoEffect", "RecordedCall"]
