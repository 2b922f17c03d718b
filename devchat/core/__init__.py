"""Core utilities for the chat log."""

from .config import Config  # noqa: F401
from .exceptions import (  # noqa: F401
    ConfigError,
    DevChatError,
    DeviceUnavailableError,
    InvalidOffsetError,
    NoContentError,
    TransportError,
    UnsupportedCommandError,
)
from .logger import get_logger, setup_logging  # noqa: F401

__all__ = [
    "Config",
    "ConfigError",
    "DevChatError",
    "DeviceUnavailableError",
    "InvalidOffsetError",
    "NoContentError",
    "TransportError",
    "UnsupportedCommandError",
    "get_logger",
    "setup_logging",
]
