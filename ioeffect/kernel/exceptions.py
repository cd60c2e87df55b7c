"""Exception hierarchy for ioeffect.

Filesystem failures are not wrapped: ``FileNotFoundError``,
``PermissionError``, ``UnicodeDecodeError`` and ``OSError`` (``ENOSPC``)
reach the caller exactly as the host raised them. The classes below cover
the failures that have no native Python exception. All of them inherit from
IoEffectError for easy exception handling.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class IoEffectError(Exception):
    """Base exception for all ioeffect errors.

    Catch this to handle every ioeffect-specific failure.
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(IoEffectError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("encoding", "unknown codec 'utf-9'")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the setting or section with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


# ============================================================================
# Process Errors
# ============================================================================


class NonZeroExitError(IoEffectError):
    """Raised by buffered execution when the process exits with a non-zero status.

    The captured output is attached so callers can still inspect what the
    process printed before failing.

    Attributes
    ----------
    command : str
        The shell command line that was run.
    exit_code : int
        The exit status. Negative values are the number of the signal that
        killed the process.
    stdout : str
        Everything the process wrote to standard output.
    stderr : str
        Everything the process wrote to standard error.
    """

    def __init__(self, command: str, exit_code: int, stdout: str = "", stderr: str = "") -> None:
        super().__init__(f"Command failed with exit code {exit_code}: {command}")
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


# ============================================================================
# Glob Errors
# ============================================================================


class InvalidPatternError(IoEffectError, ValueError):
    """Raised when a glob pattern cannot be expanded.

    Examples
    --------
    Example usage::

        raise InvalidPatternError("", "pattern must not be empty")
    """

    def __init__(self, pattern: str, reason: str) -> None:
        """Initialize invalid pattern error.

        Args
        ----
            pattern: The rejected glob pattern
            reason: Explanation of what's wrong with it
        """
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


__all__ = [
    # Base
    "IoEffectError",
    # Configuration
    "ConfigurationError",
    # Process
    "NonZeroExitError",
    # Glob
    "InvalidPatternError",
]
