"""StreamManager — per-session event buffering and SSE subscriber management."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict, deque
from typing import AsyncGenerator, Optional

from .events import SSEEvent

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 256


class StreamManager:
    """Fans session events out to SSE subscribers.

    Each session_id has a list of subscriber queues and a bounded buffer of
    recent events, replayed to clients reconnecting with Last-Event-ID.
    A session emits on every input change, so only the newest
    ``buffer_size`` events are kept.
    A queue receiving None means the session was discarded.
    """

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._subscribers: dict[str, list[asyncio.Queue[Optional[SSEEvent]]]] = defaultdict(list)
        self._buffers: dict[str, deque[SSEEvent]] = defaultdict(
            lambda: deque(maxlen=buffer_size)
        )

    async def subscribe(self, session_id: str) -> asyncio.Queue[Optional[SSEEvent]]:
        """Create and return a new subscriber queue for a session."""
        queue: asyncio.Queue[Optional[SSEEvent]] = asyncio.Queue()
        self._subscribers[session_id].append(queue)
        return queue

    async def unsubscribe(self, session_id: str, queue: asyncio.Queue[Optional[SSEEvent]]) -> None:
        subs = self._subscribers.get(session_id, [])
        if queue in subs:
            subs.remove(queue)

    async def emit(self, session_id: str, event: SSEEvent) -> None:
        """Broadcast an event to all subscribers and buffer it for replay."""
        self._buffers[session_id].append(event)
        subs = self._subscribers.get(session_id, [])
        logger.debug(
            "Session %s: %s #%d -> %d subscriber(s)",
            session_id, event.event_type.value, event.sequence_id, len(subs),
        )
        for queue in subs:
            await queue.put(event)

    def discard(self, session_id: str) -> None:
        """Forget a session: drop its buffer and end its open streams."""
        self._buffers.pop(session_id, None)
        for queue in self._subscribers.pop(session_id, []):
            queue.put_nowait(None)

    def buffered(self, session_id: str) -> list[SSEEvent]:
        """Events currently held for replay, oldest first."""
        return list(self._buffers.get(session_id, ()))

    def subscriber_count(self, session_id: str) -> int:
        return len(self._subscribers.get(session_id, []))

    async def event_generator(
        self, session_id: str, last_event_id: int | None = None
    ) -> AsyncGenerator[str, None]:
        """Async generator yielding SSE strings for a session.

        If last_event_id is provided, replays buffered events with
        sequence_id > last_event_id before switching to live events.
        Live events already sent during replay are not repeated.
        """
        queue = await self.subscribe(session_id)
        last_sent = last_event_id if last_event_id is not None else -1
        try:
            # SSE comment as connection heartbeat (ignored by browsers)
            yield ": connected\n\n"

            if last_event_id is not None:
                for event in self.buffered(session_id):
                    if event.sequence_id > last_sent:
                        last_sent = event.sequence_id
                        yield event.to_sse_string()

            while True:
                event = await queue.get()
                if event is None:
                    return
                if event.sequence_id <= last_sent:
                    continue
                last_sent = event.sequence_id
                yield event.to_sse_string()
        finally:
            await self.unsubscribe(session_id, queue)
