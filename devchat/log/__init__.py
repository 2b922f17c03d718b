"""In-memory bounded message log."""

from .message_log import MessageLog
from .metrics import LogMetrics
from .records import LogState, Message

__all__ = [
    "LogMetrics",
    "LogState",
    "Message",
    "MessageLog",
]
