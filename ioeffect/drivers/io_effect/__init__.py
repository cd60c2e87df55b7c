"""IoEffect drivers."""

from ioeffect.drivers.io_effect.real import RealIoEffect

__all__ = ["RealIoEffect"]
