"""ioeffect: one interface for filesystem and process access.

Code that touches the disk or spawns processes depends on the
:class:`IoEffect` port only; production wires in :class:`RealIoEffect`,
tests wire in :class:`MockIoEffect`.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("ioeffect")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for uninstalled source trees

from ioeffect.drivers.io_effect import RealIoEffect
from ioeffect.kernel.config import IoEffectConfig, load_config
from ioeffect.kernel.domain import (
    CommandOptions,
    EntryType,
    ExecResult,
    ExecStreamHandle,
    FileMetadata,
    GlobOptions,
)
from ioeffect.kernel.exceptions import (
    ConfigurationError,
    InvalidPatternError,
    IoEffectError,
    NonZeroExitError,
)
from ioeffect.kernel.ports import IoEffect
from ioeffect.stdlib.adapters.mock import MockCommand, MockIoEffect

__all__ = [
    "__version__",
    # Port and drivers
    "IoEffect",
    "RealIoEffect",
    "MockIoEffect",
    "MockCommand",
    # Domain
    "CommandOptions",
    "EntryType",
    "ExecResult",
    "ExecStreamHandle",
    "FileMetadata",
    "GlobOptions",
    # Config
    "IoEffectConfig",
    "load_config",
    # Errors
    "ConfigurationError",
    "InvalidPatternError",
    "IoEffectError",
    "NonZeroExitError",
]
