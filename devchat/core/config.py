"""Configuration loader for the chat log."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import logging

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_DEVICE_NAME = "chat"
DEFAULT_MAX_MESSAGE_LEN = 255
DEFAULT_MAX_ENTRIES = 255


def _coerce_optional(value: Optional[str]) -> Optional[str]:
    """Return stripped value or ``None`` when the input is empty."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _positive_int(name: str, default: int) -> int:
    raw = _coerce_optional(os.getenv(name))
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got '{raw}'.") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}.")
    return value


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration derived from environment variables."""

    device_name: str = DEFAULT_DEVICE_NAME
    max_message_len: int = DEFAULT_MAX_MESSAGE_LEN
    max_entries: int = DEFAULT_MAX_ENTRIES
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    env_path: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for name in ("max_message_len", "max_entries"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}.")

    @classmethod
    def load(cls, env_file: Optional[Path | str] = None) -> "Config":
        """Load configuration from ``.env`` and the current environment."""
        if env_file is not None:
            env_path = Path(env_file)
        else:
            env_path = Path.cwd() / ".env"

        logger = logging.getLogger(__name__)
        logger.debug("Attempting to load environment variables", extra={"env_path": str(env_path)})

        env_path_str: Optional[str] = None

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=True)
            env_path_str = str(env_path)
            logger.debug("Loaded environment file %s", env_path)
        elif env_file is not None:
            raise ConfigError(f"Environment file '{env_path}' does not exist.")

        device_name = _coerce_optional(os.getenv("DEVCHAT_DEVICE_NAME")) or DEFAULT_DEVICE_NAME
        max_message_len = _positive_int("DEVCHAT_MAX_MESSAGE_LEN", DEFAULT_MAX_MESSAGE_LEN)
        max_entries = _positive_int("DEVCHAT_MAX_ENTRIES", DEFAULT_MAX_ENTRIES)
        log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
        log_dir = _coerce_optional(os.getenv("LOG_DIR"))

        logger.debug(
            "Environment variables resolved",
            extra={
                "device_name": device_name,
                "max_message_len": max_message_len,
                "max_entries": max_entries,
                "log_dir": log_dir,
            },
        )

        return cls(
            device_name=device_name,
            max_message_len=max_message_len,
            max_entries=max_entries,
            log_level=log_level,
            log_dir=log_dir,
            env_path=env_path_str,
        )

    def as_dict(self) -> Mapping[str, Optional[str]]:
        """Expose configuration values for debugging or serialization."""
        return {
            "device_name": self.device_name,
            "max_message_len": str(self.max_message_len),
            "max_entries": str(self.max_entries),
            "log_level": self.log_level,
            "log_dir": self.log_dir,
        }
