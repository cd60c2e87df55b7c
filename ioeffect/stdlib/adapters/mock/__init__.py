"""Mock implementations for testing purposes."""

from .mock_io_effect import COMMAND_NOT_FOUND, MockCommand, MockIoEffect, RecordedCall

__all__ = [
    "COMMAND_NOT_FOUND",
    "MockCommand",
    "MockIoEffect",
    "RecordedCall",
]
