"""Character-device style facade over a :class:`MessageLog`.

The device mirrors the entry points of a ``/dev/chat`` node: module load and
unload, open and close, read, write and a control channel. Registration with
an operating system is out of scope; the device lives in-process and its log
disappears with it.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from enum import IntEnum
from typing import BinaryIO, Iterator, Optional

from devchat.core.config import Config
from devchat.core.exceptions import (
    DeviceUnavailableError,
    InvalidOffsetError,
    TransportError,
    UnsupportedCommandError,
)
from devchat.core.logger import get_logger
from devchat.log import MessageLog

_IOC_VOID = 0x20000000


def _io(group: str, number: int) -> int:
    """Encode a BSD ``_IO(group, number)`` request code."""
    return _IOC_VOID | (ord(group) << 8) | number


class ControlCommand(IntEnum):
    CLEAR = _io("c", 1)


class ModuleEvent(IntEnum):
    LOAD = 0
    UNLOAD = 1


class ChatDevice:
    """In-process chat device backed by a single owned message log.

    Lifecycle changes and log operations share ``_state_lock`` so an unload
    cannot interleave with a write that already passed the loaded check.
    Stream copies run outside it.
    """

    def __init__(self, log: MessageLog, *, name: str = "chat") -> None:
        self._log = log
        self._name = name
        self._loaded = False
        self._state_lock = threading.RLock()
        self._logger = get_logger(self.__class__.__name__)

    @classmethod
    def load(cls, config: Optional[Config] = None, *, log: Optional[MessageLog] = None) -> "ChatDevice":
        """Create a device with a fresh log sized from ``config``."""
        config = config or Config()
        if log is None:
            log = MessageLog(
                max_entries=config.max_entries,
                max_message_len=config.max_message_len,
            )
        device = cls(log, name=config.device_name)
        device.handle_event(ModuleEvent.LOAD)
        return device

    @property
    def name(self) -> str:
        return self._name

    @property
    def loaded(self) -> bool:
        with self._state_lock:
            return self._loaded

    @property
    def log(self) -> MessageLog:
        return self._log

    def handle_event(self, event: int) -> None:
        """Dispatch a module lifecycle event."""
        try:
            resolved = ModuleEvent(event)
        except ValueError as exc:
            raise UnsupportedCommandError(f"Unsupported module event {event!r}.") from exc

        if resolved is ModuleEvent.LOAD:
            with self._state_lock:
                if self._loaded:
                    return
                self._loaded = True
            self._logger.info("Chat device '%s' loaded.", self._name)
        else:
            self.unload()

    def unload(self) -> None:
        """Release every message and refuse further operations."""
        with self._state_lock:
            if not self._loaded:
                return
            self._loaded = False
            removed = self._log.clear()
        self._logger.info("Chat device '%s' unloaded (%d messages released).", self._name, removed)

    def open(self) -> "ChatDevice":
        with self._loaded_guard():
            self._logger.debug("Opened device '%s'.", self._name)
        return self

    def close(self) -> None:
        self._logger.debug("Closing device '%s'.", self._name)

    def __enter__(self) -> "ChatDevice":
        return self.open()

    def __exit__(self, exc_type, exc, traceback) -> None:  # noqa: ANN001
        self.close()

    def write(self, data: bytes | bytearray | memoryview, offset: int = 0) -> int:
        with self._loaded_guard():
            return self._log.append(data, offset)

    def read(self, offset: int = 0, length: Optional[int] = None) -> bytes:
        with self._loaded_guard():
            return self._log.read_all(offset, length)

    def write_from(self, stream: BinaryIO, offset: int = 0) -> int:
        """Copy one message in from ``stream`` and append it.

        At most ``max_message_len`` bytes are taken from the stream; anything
        after them stays there for the caller. A failed copy leaves the log
        unchanged.
        """
        if offset != 0:
            raise InvalidOffsetError(f"Writes must start at offset 0, got {offset}.")
        self._ensure_loaded()
        try:
            data = stream.read(self._log.max_message_len)
        except OSError as exc:
            self._logger.warning("Copy from caller failed: %s", exc)
            raise TransportError(f"Failed to read message from caller: {exc}") from exc
        with self._loaded_guard():
            return self._log.append(data or b"", offset)

    def read_into(self, stream: BinaryIO, offset: int = 0, length: Optional[int] = None) -> int:
        """Copy the consolidated log out to ``stream``; return bytes written."""
        with self._loaded_guard():
            payload = self._log.read_all(offset, length)
        try:
            stream.write(payload)
        except OSError as exc:
            self._logger.warning("Copy to caller failed: %s", exc)
            raise TransportError(f"Failed to deliver log to caller: {exc}") from exc
        return len(payload)

    def ioctl(self, command: int) -> None:
        """Run a control command. Only ``ControlCommand.CLEAR`` is recognised."""
        with self._loaded_guard():
            if command != ControlCommand.CLEAR:
                raise UnsupportedCommandError(f"Unsupported control command {command!r}.")
            removed = self._log.clear()
        self._logger.info("Cleared chat device '%s' (%d messages).", self._name, removed)

    def _ensure_loaded(self) -> None:
        with self._state_lock:
            if not self._loaded:
                raise DeviceUnavailableError(f"Chat device '{self._name}' is not loaded.")

    @contextmanager
    def _loaded_guard(self) -> Iterator[None]:
        with self._state_lock:
            self._ensure_loaded()
            yield
