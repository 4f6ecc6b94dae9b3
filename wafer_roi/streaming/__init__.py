"""SSE streaming infrastructure for interactive calculator sessions."""

from .events import SessionEventType, SSEEvent
from .manager import StreamManager

__all__ = ["SessionEventType", "SSEEvent", "StreamManager"]
