"""Operating-system backed IoEffect driver.

Each capability delegates to one native facility: ``aiofiles`` for file
access (run in a worker thread so the event loop never blocks), asyncio
subprocesses for command execution and :func:`glob.glob` for pattern
expansion. Errors from those facilities propagate unchanged.

Example
-------
.. code-block:: python

    io = RealIoEffect()
    handle = await io.aexec_stream("make test")
    async for line in handle.stdout_lines:
        print(line)
    if await handle.exit_code != 0:
        ...
"""

from __future__ import annotations

import asyncio
import glob
import os
from dataclasses import asdict
from typing import TYPE_CHECKING

import aiofiles
import aiofiles.os

from ioeffect.kernel.domain.io import (
    CommandOptions,
    ExecResult,
    ExecStreamHandle,
    FileMetadata,
    GlobOptions,
)
from ioeffect.kernel.exceptions import InvalidPatternError, NonZeroExitError
from ioeffect.kernel.logging import configure_logging, get_logger
from ioeffect.kernel.utils.line_split import iter_chunks, split_lines

if TYPE_CHECKING:
    from ioeffect.kernel.config.models import IoEffectConfig

logger = get_logger(__name__)


class RealIoEffect:
    """IoEffect implementation backed by the host operating system.

    The driver is stateless: every call is independent, and nothing is kept
    about a spawned process once its handle has been returned. Processes
    are never killed on the caller's behalf.

    Parameters
    ----------
    encoding : str, default="utf-8"
        Encoding for file contents and, unless overridden per command,
        process output.
    shell : str | None, default=None
        Shell executable that interprets command lines. None uses the host
        default (``/bin/sh`` on POSIX).

    Notes
    -----
    Spawning goes through the shell, so a command that does not exist is
    reported the way the shell reports it: the process exits with status
    127 and a message on stderr. Only failures to start the shell itself,
    such as a missing ``cwd``, raise from :meth:`aexec_stream`.
    """

    def __init__(self, encoding: str = "utf-8", shell: str | None = None) -> None:
        self._encoding = encoding
        self._shell = shell

    @classmethod
    def from_config(cls, config: IoEffectConfig) -> RealIoEffect:
        """Build a driver from loaded configuration.

        The configuration's ``logging`` section is applied to the global
        Loguru setup through :func:`configure_logging`.
        """
        configure_logging(**asdict(config.logging))
        return cls(encoding=config.encoding, shell=config.shell)

    # ------------------------------------------------------------------
    # Filesystem
    # ------------------------------------------------------------------

    async def astat(
        self, path: str | os.PathLike[str], *, follow_symlinks: bool = True
    ) -> FileMetadata:
        result = await aiofiles.os.stat(path, follow_symlinks=follow_symlinks)
        return FileMetadata.from_stat_result(path, result)

    async def aread_file(self, path: str | os.PathLike[str]) -> str:
        # newline="" keeps "\r\n" intact so content round-trips unchanged
        async with aiofiles.open(path, encoding=self._encoding, newline="") as f:
            content = await f.read()
        logger.debug("Read {size} chars from {path}", size=len(content), path=path)
        return content

    async def awrite_file(self, path: str | os.PathLike[str], content: str) -> None:
        async with aiofiles.open(path, "w", encoding=self._encoding, newline="") as f:
            await f.write(content)
        logger.debug("Wrote {size} chars to {path}", size=len(content), path=path)

    # ------------------------------------------------------------------
    # Processes
    # ------------------------------------------------------------------

    async def _spawn(self, command: str, options: CommandOptions) -> asyncio.subprocess.Process:
        """Start ``command`` under the shell with stdout/stderr piped."""
        process = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=options.cwd,
            env=options.env,
            executable=options.shell or self._shell,
        )
        logger.debug("Spawned pid={pid}: {command}", pid=process.pid, command=command)
        return process

    async def aexec(self, command: str, options: CommandOptions | None = None) -> ExecResult:
        options = options or CommandOptions()
        encoding = options.encoding or self._encoding

        process = await self._spawn(command, options)
        stdout_bytes, stderr_bytes = await process.communicate()
        stdout = stdout_bytes.decode(encoding, errors="replace")
        stderr = stderr_bytes.decode(encoding, errors="replace")

        exit_code = process.returncode
        logger.debug("pid={pid} exited with {code}", pid=process.pid, code=exit_code)
        if exit_code != 0:
            raise NonZeroExitError(command, exit_code, stdout=stdout, stderr=stderr)
        return ExecResult(stdout=stdout, stderr=stderr)

    async def aexec_stream(
        self, command: str, options: CommandOptions | None = None
    ) -> ExecStreamHandle:
        options = options or CommandOptions()
        encoding = options.encoding or self._encoding

        process = await self._spawn(command, options)
        if process.stdout is None or process.stderr is None:
            raise RuntimeError(f"pid={process.pid} was spawned without output pipes")

        return ExecStreamHandle(
            stdout_lines=split_lines(iter_chunks(process.stdout), encoding),
            stderr_lines=split_lines(iter_chunks(process.stderr), encoding),
            exit_code=asyncio.get_running_loop().create_task(_wait_for_exit(process)),
        )

    # ------------------------------------------------------------------
    # Pattern expansion
    # ------------------------------------------------------------------

    def glob_sync(self, pattern: str, options: GlobOptions | None = None) -> list[str]:
        options = options or GlobOptions()
        if not pattern:
            raise InvalidPatternError(pattern, "pattern must not be empty")
        if "\x00" in pattern:
            raise InvalidPatternError(pattern, "pattern must not contain NUL characters")

        root = os.fspath(options.cwd)
        matches = glob.glob(
            pattern,
            root_dir=root,
            recursive=options.recursive,
            include_hidden=options.dot,
        )
        if options.nodir:
            matches = [m for m in matches if not os.path.isdir(os.path.join(root, m))]
        if options.absolute:
            matches = [os.path.abspath(os.path.join(root, m)) for m in matches]
        return matches


async def _wait_for_exit(process: asyncio.subprocess.Process) -> int:
    """Resolve with the exit status once the process has closed.

    A process killed by a signal reports the negated signal number.
    """
    exit_code = await process.wait()
    logger.debug("pid={pid} exited with {code}", pid=process.pid, code=exit_code)
    return exit_code


__all__ = ["RealIoEffect"]
