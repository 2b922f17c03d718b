"""Custom exception hierarchy for the chat log."""

from __future__ import annotations

import errno as _errno


class DevChatError(Exception):
    """Base class for project-specific exceptions.

    ``errno`` is the POSIX code the command-line tools exit with.
    """

    errno: int = _errno.EIO


class ConfigError(DevChatError):
    """Raised when configuration loading or validation fails."""

    errno = _errno.EINVAL


class InvalidOffsetError(DevChatError):
    """Raised for random-access writes or negative read offsets."""

    errno = _errno.EINVAL


class NoContentError(DevChatError):
    """Raised when reading a log that holds no entries."""

    errno = _errno.ENOMSG


class UnsupportedCommandError(DevChatError):
    """Raised when the control channel receives an unknown command."""

    errno = _errno.EOPNOTSUPP


class TransportError(DevChatError):
    """Raised when copying bytes to or from a caller stream fails."""

    errno = _errno.EFAULT


class DeviceUnavailableError(DevChatError):
    """Raised when an operation targets a device that has been unloaded."""

    errno = _errno.ENXIO
