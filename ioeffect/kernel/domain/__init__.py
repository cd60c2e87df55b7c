"""Domain models for ioeffect."""

from ioeffect.kernel.domain.io import (
    CommandOptions,
    EntryType,
    ExecResult,
    ExecStreamHandle,
    FileMetadata,
    GlobOptions,
)

__all__ = [
    "CommandOptions",
    "EntryType",
    "ExecResult",
    "ExecStreamHandle",
    "FileMetadata",
    "GlobOptions",
]
