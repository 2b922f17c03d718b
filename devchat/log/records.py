"""Data contracts for the message log."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogState(str, Enum):
    """Observable state of a message log."""

    EMPTY = "empty"
    NON_EMPTY = "non_empty"


@dataclass(frozen=True, slots=True)
class Message:
    """One appended entry. ``sequence`` is diagnostic only; order is positional."""

    content: bytes
    sequence: int

    def __len__(self) -> int:
        return len(self.content)
