"""SSE event types and serialization for calculator sessions."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def _json_safe(value: Any) -> Any:
    """Replace inf/NaN floats with None, recursing into containers."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


class SessionEventType(str, Enum):
    """All event types emitted during an interactive calculator session."""

    # Session lifecycle
    SESSION_STARTED = "session_started"
    SESSION_ERROR = "session_error"

    # Input changes
    INPUT_CHANGED = "input_changed"
    INPUTS_RESET = "inputs_reset"

    # Recalculation
    RECALCULATION_STARTED = "recalculation_started"
    RECALCULATION_COMPLETED = "recalculation_completed"
    ROI_UNDEFINED = "roi_undefined"


@dataclass
class SSEEvent:
    """A single Server-Sent Event ready for wire serialization."""

    event_type: SessionEventType
    data: dict[str, Any]
    sequence_id: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def to_sse_string(self) -> str:
        """Serialize to SSE wire format.

        Format:
            event: <type>
            data: <json>
            id: <seq>

            (terminated by double newline)

        Non-finite floats are sent as null; bare NaN/Infinity tokens are
        not valid JSON.
        """
        payload = {
            **_json_safe(self.data),
            "timestamp": self.timestamp.isoformat(),
        }
        data_json = json.dumps(payload, default=str, allow_nan=False)
        return f"event: {self.event_type.value}\ndata: {data_json}\nid: {self.sequence_id}\n\n"
