"""Bounded, append-ordered log of short byte messages.

The log keeps at most ``max_entries`` messages of at most ``max_message_len``
bytes each. The oldest message sits at the tail (left end of the deque) and is
evicted when a new append would exceed the capacity. Reads return every
retained message concatenated oldest-first with no delimiter.

All structural changes and the read snapshot happen under one lock. Slicing
the snapshot and logging happen after the lock is released.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, Optional

from devchat.core.config import DEFAULT_MAX_ENTRIES, DEFAULT_MAX_MESSAGE_LEN
from devchat.core.exceptions import InvalidOffsetError, NoContentError
from devchat.core.logger import get_logger

from .metrics import LogMetrics
from .records import LogState, Message


class MessageLog:
    """Thread-safe bounded message log with tail eviction."""

    def __init__(
        self,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_message_len: int = DEFAULT_MAX_MESSAGE_LEN,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if max_message_len <= 0:
            raise ValueError("max_message_len must be positive")
        self._max_entries = max_entries
        self._max_message_len = max_message_len
        self._entries: Deque[Message] = deque()
        self._next_sequence = 0
        self._metrics = LogMetrics()
        self._lock = threading.Lock()
        self._logger = get_logger(self.__class__.__name__)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def max_message_len(self) -> int:
        return self._max_message_len

    @property
    def state(self) -> LogState:
        with self._lock:
            return LogState.NON_EMPTY if self._entries else LogState.EMPTY

    @property
    def metrics(self) -> Dict[str, int]:
        """Return a copy of the counters taken under the lock."""
        with self._lock:
            return self._metrics.as_dict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def append(self, data: bytes | bytearray | memoryview, offset: int = 0) -> int:
        """Store ``data`` as the newest message and return the bytes kept.

        Input longer than ``max_message_len`` is truncated without error. Only
        whole-message writes at offset 0 are accepted.
        """
        if offset != 0:
            raise InvalidOffsetError(f"Writes must start at offset 0, got {offset}.")
        if isinstance(data, str):
            raise TypeError("MessageLog.append expects bytes, not str")

        raw = bytes(data)
        content = raw[: self._max_message_len]
        truncated = len(raw) > len(content)

        with self._lock:
            evicted: Optional[Message] = None
            if len(self._entries) >= self._max_entries:
                evicted = self._entries.popleft()
            message = Message(content=content, sequence=self._next_sequence)
            self._next_sequence += 1
            self._entries.append(message)
            count = len(self._entries)
            self._metrics.record_append(
                stored=len(content),
                truncated=truncated,
                evicted=evicted is not None,
            )

        if truncated:
            self._logger.debug(
                "Truncated message #%d from %d to %d bytes", message.sequence, len(raw), len(content)
            )
        if evicted is not None:
            self._logger.debug("Evicted message #%d to stay within %d entries", evicted.sequence, self._max_entries)
        self._logger.debug("Appended message #%d (%d bytes, %d entries)", message.sequence, len(content), count)
        return len(content)

    def read_all(self, offset: int = 0, length: Optional[int] = None) -> bytes:
        """Return the consolidated log, clipped to ``[offset, offset + length)``.

        Raises ``NoContentError`` when the log holds no entries. Ranges that
        start at or beyond the end of the consolidated buffer yield ``b""``.
        """
        if offset < 0:
            raise InvalidOffsetError(f"Read offset must not be negative, got {offset}.")
        if length is not None and length < 0:
            raise ValueError("length must not be negative")

        with self._lock:
            if not self._entries:
                self._metrics.record_read(empty=True)
                raise NoContentError("The message log is empty.")
            snapshot = b"".join(message.content for message in self._entries)
            self._metrics.record_read(empty=False)

        end = len(snapshot) if length is None else offset + length
        return snapshot[offset:end]

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            self._metrics.record_clear(removed)

        self._logger.debug("Cleared %d messages", removed)
        return removed

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return (
            f"MessageLog(entries={len(self)}, max_entries={self._max_entries}, "
            f"max_message_len={self._max_message_len})"
        )
