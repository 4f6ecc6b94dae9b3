"""Interactive calculator sessions held in process memory.

A session owns the current form inputs and recomputes the results on
every change. Nothing is persisted; sessions vanish on restart.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from uuid import uuid4

from wafer_roi.content import default_inputs
from wafer_roi.engine import CalculatorInputs, CalculatorResults, compute
from wafer_roi.presentation import build_dashboard

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000
DEFAULT_IDLE_TTL_SECONDS = 3600.0

INPUT_NAMES = frozenset(f.name for f in dataclasses.fields(CalculatorInputs))


@dataclass
class CalculatorSession:
    session_id: str
    inputs: CalculatorInputs = field(default_factory=default_inputs)
    results: Optional[CalculatorResults] = None
    _sequence: int = 0

    def __post_init__(self) -> None:
        if self.results is None:
            self.results = compute(self.inputs)

    def next_sequence_id(self) -> int:
        self._sequence += 1
        return self._sequence

    def apply_changes(self, **changes: float) -> CalculatorResults:
        """Replace one or more inputs and recompute.

        Raises ValueError for names that are not calculator inputs.
        """
        unknown = set(changes) - INPUT_NAMES
        if unknown:
            raise ValueError(f"Unknown calculator inputs: {sorted(unknown)}")
        self.inputs = dataclasses.replace(self.inputs, **changes)
        self.results = compute(self.inputs)
        return self.results

    def reset(self) -> CalculatorResults:
        self.inputs = default_inputs()
        self.results = compute(self.inputs)
        return self.results

    def snapshot(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "inputs": dataclasses.asdict(self.inputs),
            "results": self.results.to_dict(),
            "dashboard": build_dashboard(self.results).to_dict(),
        }


class SessionStore:
    """In-memory session lookup (no persistence).

    Sessions idle for longer than ``idle_ttl`` seconds are dropped, and when
    ``max_sessions`` is reached the least recently used one is dropped to
    make room. ``on_evict`` is called with the id of every dropped session.
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        idle_ttl: float = DEFAULT_IDLE_TTL_SECONDS,
        on_evict: Optional[Callable[[str], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self._max_sessions = max_sessions
        self._idle_ttl = idle_ttl
        self._on_evict = on_evict
        self._clock = clock
        # session_id -> (session, last access); least recently used first
        self._sessions: OrderedDict[str, tuple[CalculatorSession, float]] = OrderedDict()

    def create(self) -> CalculatorSession:
        self.evict_expired()
        while len(self._sessions) >= self._max_sessions:
            oldest_id = next(iter(self._sessions))
            self._evict(oldest_id, reason="capacity")
        session = CalculatorSession(session_id=str(uuid4()))
        self._sessions[session.session_id] = (session, self._clock())
        return session

    def get(self, session_id: str) -> Optional[CalculatorSession]:
        """Return a live session and mark it as recently used."""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        session, last_seen = entry
        now = self._clock()
        if now - last_seen > self._idle_ttl:
            self._evict(session_id, reason="idle")
            return None
        self._sessions[session_id] = (session, now)
        self._sessions.move_to_end(session_id)
        return session

    def evict_expired(self) -> list[str]:
        """Drop every idle session; returns the dropped ids."""
        now = self._clock()
        expired = [
            session_id
            for session_id, (_, last_seen) in self._sessions.items()
            if now - last_seen > self._idle_ttl
        ]
        for session_id in expired:
            self._evict(session_id, reason="idle")
        return expired

    def _evict(self, session_id: str, reason: str) -> None:
        del self._sessions[session_id]
        logger.info("Evicted session %s (%s)", session_id, reason)
        if self._on_evict is not None:
            self._on_evict(session_id)

    def __len__(self) -> int:
        return len(self._sessions)
