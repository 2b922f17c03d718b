"""Command-line interface for writing to and reading from the chat device."""

from __future__ import annotations

import logging
import sys
from typing import Iterable

from devchat.core.config import Config
from devchat.core.exceptions import DevChatError, NoContentError
from devchat.core.logger import get_logger
from devchat.device import ChatDevice, ControlCommand

_EXIT_COMMANDS: tuple[str, ...] = ("exit", "quit")
_PROMPT = "chat> "


def run(config: Config) -> None:
    """Launch an interactive session on a freshly loaded device."""
    logger = get_logger(__name__)
    device = ChatDevice.load(config)
    logger.info("Starting CLI session on device '%s'", device.name)

    print(f"devchat: /{device.name} ({config.max_entries} messages x {config.max_message_len} bytes)")
    print("Type a line to append it. Commands: /read, /clear, /stats, exit")

    try:
        with device:
            _interactive_loop(_EXIT_COMMANDS, logger, device)
    finally:
        device.unload()


def run_single_command(config: Config, messages: Iterable[str]) -> int:
    """Append ``messages`` in order, print the consolidated log, return an exit code."""
    logger = get_logger(__name__)
    device = ChatDevice.load(config)
    try:
        with device:
            for message in messages:
                device.write(message.encode("utf-8"))
            return _print_log(device, logger)
    finally:
        device.unload()


def _interactive_loop(exit_commands: Iterable[str], logger: logging.Logger, device: ChatDevice) -> None:
    normalized = {cmd.lower() for cmd in exit_commands}

    while True:
        try:
            line = input(_PROMPT)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break

        command = line.strip().lower()
        if not command:
            continue
        if command in normalized:
            break

        try:
            if command == "/read":
                _print_log(device, logger)
            elif command == "/clear":
                device.ioctl(ControlCommand.CLEAR)
                print("(cleared)")
            elif command == "/stats":
                for key, value in device.log.metrics.items():
                    print(f"{key}: {value}")
            else:
                stored = device.write(line.encode("utf-8"))
                logger.debug("Stored %d bytes", stored)
        except DevChatError as exc:
            logger.error("Command failed: %s", exc)
            print(f"error: {exc}")


def _print_log(device: ChatDevice, logger: logging.Logger) -> int:
    try:
        payload = device.read()
    except NoContentError as exc:
        logger.debug("Nothing to read: %s", exc)
        print("(no messages)")
        return 0
    sys.stdout.write(payload.decode("utf-8", errors="replace"))
    sys.stdout.write("\n")
    sys.stdout.flush()
    return 0
