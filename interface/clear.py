"""``clrchat``: issue the clear control command and report the outcome."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from devchat.core.exceptions import DevChatError
from devchat.core.logger import get_logger
from devchat.device import ChatDevice, ControlCommand


def clear_device(device: ChatDevice, *, stderr: Optional[TextIO] = None) -> int:
    """Clear ``device`` and return a process exit code (0 on success)."""
    logger = get_logger(__name__)
    try:
        device.ioctl(ControlCommand.CLEAR)
    except DevChatError as exc:
        logger.error("Clear failed: %s", exc)
        print(f"clrchat: {exc}", file=stderr or sys.stderr)
        return exc.errno
    return 0


def main() -> None:
    from devchat.core.config import Config
    from devchat.core.exceptions import ConfigError
    from devchat.core.logger import setup_logging

    try:
        config = Config.load()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(exc.errno) from exc

    setup_logging(config.log_level, log_dir=config.log_dir)
    device = ChatDevice.load(config)
    raise SystemExit(clear_device(device))


if __name__ == "__main__":
    main()
