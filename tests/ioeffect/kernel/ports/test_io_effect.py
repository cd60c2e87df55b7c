"""Tests for the IoEffect port protocol."""

from __future__ import annotations

import asyncio
import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from ioeffect.drivers.io_effect import RealIoEffect
from ioeffect.kernel.domain.io import (
    CommandOptions,
    EntryType,
    ExecResult,
    ExecStreamHandle,
    FileMetadata,
    GlobOptions,
)
from ioeffect.kernel.ports.io_effect import IoEffect
from ioeffect.stdlib.adapters.mock import MockIoEffect

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


async def _no_lines() -> AsyncIterator[str]:
    return
    yield  # pragma: no cover


class MinimalIoEffect:
    """Smallest possible implementation, used to check protocol conformance."""

    async def astat(
        self, path: str | os.PathLike[str], *, follow_symlinks: bool = True
    ) -> FileMetadata:
        now = datetime.now(tz=UTC)
        return FileMetadata(
            path=str(path),
            size=0,
            mode=0o644,
            entry_type=EntryType.FILE,
            modified_at=now,
            accessed_at=now,
            changed_at=now,
        )

    async def aread_file(self, path: str | os.PathLike[str]) -> str:
        return ""

    async def awrite_file(self, path: str | os.PathLike[str], content: str) -> None:
        return None

    async def aexec(self, command: str, options: CommandOptions | None = None) -> ExecResult:
        return ExecResult(stdout="", stderr="")

    async def aexec_stream(
        self, command: str, options: CommandOptions | None = None
    ) -> ExecStreamHandle:
        exit_code: asyncio.Future[int] = asyncio.get_running_loop().create_future()
        exit_code.set_result(0)
        return ExecStreamHandle(
            stdout_lines=_no_lines(), stderr_lines=_no_lines(), exit_code=exit_code
        )

    def glob_sync(self, pattern: str, options: GlobOptions | None = None) -> list[str]:
        return []


class IncompleteIoEffect:
    """Lacks the streaming capability."""

    async def astat(self, path: str) -> FileMetadata:
        raise NotImplementedError

    async def aread_file(self, path: str) -> str:
        return ""

    async def awrite_file(self, path: str, content: str) -> None:
        return None

    async def aexec(self, command: str, options: CommandOptions | None = None) -> ExecResult:
        return ExecResult(stdout="", stderr="")

    def glob_sync(self, pattern: str, options: GlobOptions | None = None) -> list[str]:
        return []


class TestIoEffectProtocol:
    def test_minimal_implementation_satisfies_protocol(self) -> None:
        assert isinstance(MinimalIoEffect(), IoEffect)

    def test_real_driver_satisfies_protocol(self) -> None:
        assert isinstance(RealIoEffect(), IoEffect)

    def test_mock_satisfies_protocol(self) -> None:
        assert isinstance(MockIoEffect(), IoEffect)

    def test_missing_capability_fails_protocol(self) -> None:
        assert not isinstance(IncompleteIoEffect(), IoEffect)

    @pytest.mark.asyncio()
    async def test_stream_handle_members_are_independent(self) -> None:
        handle = await MinimalIoEffect().aexec_stream("anything")
        assert await handle.exit_code == 0
        assert [line async for line in handle.stdout_lines] == []
        assert [line async for line in handle.stderr_lines] == []


class TestCallerDependsOnPortOnly:
    """Higher-level code written against the port runs on any implementation."""

    @staticmethod
    async def copy_file(io: IoEffect, source: str, target: str) -> int:
        content = await io.aread_file(source)
        await io.awrite_file(target, content)
        metadata = await io.astat(target)
        return metadata.size

    @pytest.mark.asyncio()
    async def test_with_mock(self) -> None:
        io = MockIoEffect(files={"a.txt": "abc"})
        assert await self.copy_file(io, "a.txt", "b.txt") == 3
        assert io.files["b.txt"] == "abc"

    @pytest.mark.asyncio()
    async def test_with_real_driver(self, tmp_path: os.PathLike[str]) -> None:
        source = os.path.join(tmp_path, "a.txt")
        target = os.path.join(tmp_path, "b.txt")
        with open(source, "w", encoding="utf-8") as f:
            f.write("abc")
        assert await self.copy_file(RealIoEffect(), source, target) == 3
