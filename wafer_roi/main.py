"""FastAPI application for the wafer prepayment ROI calculator — REST endpoints and SSE streaming."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict

from wafer_roi.config import get_settings
from wafer_roi.content import INPUT_FIELDS, get_methodology
from wafer_roi.content.inputs import DEFAULT_VALUES
from wafer_roi.engine import CalculatorInputs, CalculatorResults, compute
from wafer_roi.hooks import log_calculation
from wafer_roi.metrics import get_all_metrics
from wafer_roi.presentation import build_dashboard
from wafer_roi.session import CalculatorSession, SessionStore
from wafer_roi.streaming import SessionEventType, SSEEvent, StreamManager

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wafer ROI API", version="0.1.0")

# CORS — allow the calculator frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Singleton stream manager
stream_manager = StreamManager(buffer_size=settings.stream_buffer_size)

# In-memory sessions, gone on restart
_sessions = SessionStore(
    max_sessions=settings.max_sessions,
    idle_ttl=settings.session_idle_ttl_seconds,
    on_evict=stream_manager.discard,
)


class CalculatorInputsModel(BaseModel):
    """Form values; omitted fields take the form defaults."""

    model_config = ConfigDict(allow_inf_nan=False)

    annual_wafer_demand: float = DEFAULT_VALUES["annual_wafer_demand"]
    wafer_cost: float = DEFAULT_VALUES["wafer_cost"]
    prepayment: float = DEFAULT_VALUES["prepayment"]
    price_discount: float = DEFAULT_VALUES["price_discount"]
    flexibility_band: float = DEFAULT_VALUES["flexibility_band"]

    def to_inputs(self) -> CalculatorInputs:
        return CalculatorInputs(**self.model_dump())


class InputChangesModel(BaseModel):
    """Partial update of a session's inputs."""

    model_config = ConfigDict(allow_inf_nan=False, extra="forbid")

    annual_wafer_demand: Optional[float] = None
    wafer_cost: Optional[float] = None
    prepayment: Optional[float] = None
    price_discount: Optional[float] = None
    flexibility_band: Optional[float] = None


class CalculatorResultsModel(BaseModel):
    """Overflowed amounts are null."""

    base_cost: Optional[float]
    prepayment_amount: Optional[float]
    cost_savings: Optional[float]
    flexibility_value: Optional[float]
    base_roi: Optional[float]
    total_roi: Optional[float]
    roi_defined: bool
    warnings: list[str]

    @classmethod
    def from_results(cls, results: CalculatorResults) -> "CalculatorResultsModel":
        return cls(**results.to_dict(), roi_defined=results.roi_defined)


class CalculationResponse(BaseModel):
    inputs: CalculatorInputsModel
    results: CalculatorResultsModel
    dashboard: dict[str, Any]


def _require_session(session_id: str) -> CalculatorSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


async def _emit(session: CalculatorSession, event_type: SessionEventType, data: dict[str, Any]) -> None:
    await stream_manager.emit(session.session_id, SSEEvent(
        event_type=event_type,
        data={"session_id": session.session_id, **data},
        sequence_id=session.next_sequence_id(),
    ))


async def _publish_recalculation(session: CalculatorSession) -> None:
    """Emit the recalculated results, flagging an undefined ROI."""
    snapshot = session.snapshot()
    await _emit(session, SessionEventType.RECALCULATION_COMPLETED, {
        "results": snapshot["results"],
        "dashboard": snapshot["dashboard"],
    })
    if not session.results.roi_defined:
        await _emit(session, SessionEventType.ROI_UNDEFINED, {
            "warnings": list(session.results.warnings),
        })


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/inputs")
async def list_inputs():
    """Form field definitions with defaults and tooltips."""
    return {"fields": [f.to_dict() for f in INPUT_FIELDS]}


@app.get("/api/metrics")
async def list_metrics():
    """Registered metric definitions."""
    return {"metrics": [m.to_dict() for m in get_all_metrics().values()]}


@app.get("/api/methodology")
async def methodology():
    """Content of the "How It Works" tab."""
    return get_methodology()


@app.post("/api/roi", response_model=CalculationResponse)
async def calculate(body: CalculatorInputsModel):
    """One-off calculation; nothing is stored."""
    inputs = body.to_inputs()
    results = compute(inputs)
    log_calculation(inputs, results, source="api")
    return CalculationResponse(
        inputs=body,
        results=CalculatorResultsModel.from_results(results),
        dashboard=build_dashboard(results).to_dict(),
    )


@app.post("/api/sessions")
async def create_session():
    """Start an interactive calculator session at the default inputs."""
    session = _sessions.create()
    log_calculation(session.inputs, session.results, source="session", session_id=session.session_id)
    snapshot = session.snapshot()
    await _emit(session, SessionEventType.SESSION_STARTED, {
        "inputs": snapshot["inputs"],
        "results": snapshot["results"],
    })
    return snapshot


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    """Return the session's current inputs and results (polling fallback)."""
    return _require_session(session_id).snapshot()


@app.patch("/api/sessions/{session_id}/inputs")
async def change_inputs(session_id: str, body: InputChangesModel):
    """Apply input changes and recompute."""
    session = _require_session(session_id)
    changes = body.model_dump(exclude_none=True)

    await _emit(session, SessionEventType.INPUT_CHANGED, {"changes": changes})
    await _emit(session, SessionEventType.RECALCULATION_STARTED, {})
    try:
        results = session.apply_changes(**changes)
    except ValueError as e:
        logger.warning("Rejected input change for session %s: %s", session_id, e)
        await _emit(session, SessionEventType.SESSION_ERROR, {"error": str(e)})
        raise HTTPException(status_code=422, detail=str(e)) from e

    log_calculation(session.inputs, results, source="session", session_id=session_id)
    await _publish_recalculation(session)
    return session.snapshot()


@app.post("/api/sessions/{session_id}/reset")
async def reset_session(session_id: str):
    """Restore the default inputs."""
    session = _require_session(session_id)
    await _emit(session, SessionEventType.INPUTS_RESET, {})
    results = session.reset()
    log_calculation(session.inputs, results, source="session", session_id=session_id)
    await _publish_recalculation(session)
    return session.snapshot()


@app.get("/api/sessions/{session_id}/stream")
async def stream_session(session_id: str, request: Request):
    """SSE endpoint — streams input changes and recalculations."""
    _require_session(session_id)

    last_event_id: int | None = None
    raw = request.headers.get("Last-Event-ID") or request.headers.get("last-event-id")
    if raw is not None:
        try:
            last_event_id = int(raw)
        except ValueError:
            logger.debug("Ignoring malformed Last-Event-ID %r", raw)

    generator = stream_manager.event_generator(session_id, last_event_id=last_event_id)
    return StreamingResponse(generator, media_type="text/event-stream")
