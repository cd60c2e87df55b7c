"""Port interfaces for ioeffect."""

from ioeffect.kernel.ports.io_effect import IoEffect

__all__ = ["IoEffect"]
