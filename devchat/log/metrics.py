"""Counters describing what a message log has done since it was created."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(slots=True)
class LogMetrics:
    appends: int = 0
    bytes_stored: int = 0
    truncations: int = 0
    evictions: int = 0
    reads: int = 0
    empty_reads: int = 0
    clears: int = 0
    entries_cleared: int = 0

    def record_append(self, *, stored: int, truncated: bool, evicted: bool) -> None:
        self.appends += 1
        self.bytes_stored += stored
        if truncated:
            self.truncations += 1
        if evicted:
            self.evictions += 1

    def record_read(self, *, empty: bool) -> None:
        if empty:
            self.empty_reads += 1
        else:
            self.reads += 1

    def record_clear(self, removed: int) -> None:
        self.clears += 1
        self.entries_cleared += removed

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["LogMetrics"]
