"""Tests for FastAPI endpoints — calculation, sessions, SSE stream, CORS, health."""

import threading
import time

import httpx
import pytest
import uvicorn
from httpx import ASGITransport, AsyncClient

from wafer_roi.main import app, stream_manager


class _TestServer:
    """Runs the FastAPI app on a real server in a background thread."""

    def __init__(self, host: str = "127.0.0.1", port: int = 9877):
        self.host = host
        self.port = port
        self.base_url = f"http://{host}:{port}"
        self._server = None

    def start(self):
        config = uvicorn.Config(app, host=self.host, port=self.port, log_level="error")
        self._server = uvicorn.Server(config)
        thread = threading.Thread(target=self._server.run, daemon=True)
        thread.start()
        # Wait for server to be ready
        for _ in range(50):
            try:
                httpx.get(f"{self.base_url}/health", timeout=0.5)
                return
            except httpx.ConnectError:
                time.sleep(0.1)

    def stop(self):
        if self._server:
            self._server.should_exit = True


@pytest.fixture(scope="module")
def server():
    srv = _TestServer()
    srv.start()
    yield srv
    srv.stop()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestCalculationAPI:
    @pytest.mark.asyncio
    async def test_empty_body_uses_defaults(self):
        async with _client() as client:
            resp = await client.post("/api/roi", json={})
        assert resp.status_code == 200
        body = resp.json()
        assert body["inputs"]["annual_wafer_demand"] == 30000
        assert body["results"]["base_cost"] == pytest.approx(240_000_000)
        assert body["results"]["base_roi"] == pytest.approx(50.0)
        assert body["results"]["total_roi"] == pytest.approx(110.0)
        assert body["results"]["roi_defined"] is True

    @pytest.mark.asyncio
    async def test_dashboard_included(self):
        async with _client() as client:
            resp = await client.post("/api/roi", json={"price_discount": 8})
        cards = resp.json()["dashboard"]["cards"]
        assert cards[0]["display"] == "80.0%"
        assert cards[2]["display"] == "$19.2M"

    @pytest.mark.asyncio
    async def test_zero_prepayment_returns_null_roi(self):
        async with _client() as client:
            resp = await client.post("/api/roi", json={"prepayment": 0})
        assert resp.status_code == 200
        results = resp.json()["results"]
        assert results["prepayment_amount"] == 0
        assert results["base_roi"] is None
        assert results["total_roi"] is None
        assert results["roi_defined"] is False
        assert results["warnings"]

    @pytest.mark.asyncio
    async def test_numeric_strings_are_coerced(self):
        async with _client() as client:
            resp = await client.post("/api/roi", json={"wafer_cost": "10000"})
        assert resp.status_code == 200
        assert resp.json()["results"]["base_cost"] == pytest.approx(300_000_000)

    @pytest.mark.asyncio
    async def test_negative_values_are_computed_through(self):
        async with _client() as client:
            resp = await client.post("/api/roi", json={"price_discount": -5, "flexibility_band": 0})
        assert resp.status_code == 200
        assert resp.json()["results"]["base_roi"] == pytest.approx(-50.0)

    @pytest.mark.asyncio
    async def test_non_numeric_value_rejected(self):
        async with _client() as client:
            resp = await client.post("/api/roi", json={"prepayment": "ten"})
        assert resp.status_code == 422


    @pytest.mark.asyncio
    async def test_overflowing_inputs_report_undefined_roi(self):
        async with _client() as client:
            resp = await client.post(
                "/api/roi", json={"annual_wafer_demand": 1e200, "wafer_cost": 1e200}
            )
        assert resp.status_code == 200
        results = resp.json()["results"]
        assert results["base_cost"] is None
        assert results["base_roi"] is None
        assert results["roi_defined"] is False
        assert len(results["warnings"]) == 2


class TestContentAPI:
    @pytest.mark.asyncio
    async def test_inputs(self):
        async with _client() as client:
            resp = await client.get("/api/inputs")
        fields = resp.json()["fields"]
        assert len(fields) == 5
        assert fields[4]["name"] == "flexibility_band"
        assert fields[4]["default"] == 30

    @pytest.mark.asyncio
    async def test_metrics(self):
        async with _client() as client:
            resp = await client.get("/api/metrics")
        ids = [m["id"] for m in resp.json()["metrics"]]
        assert ids[0] == "base_cost"
        assert ids[-1] == "total_roi"

    @pytest.mark.asyncio
    async def test_methodology(self):
        async with _client() as client:
            resp = await client.get("/api/methodology")
        assert len(resp.json()["steps"]) == 4


class TestSessionAPI:
    @pytest.mark.asyncio
    async def test_create_session(self):
        async with _client() as client:
            resp = await client.post("/api/sessions")
        assert resp.status_code == 200
        body = resp.json()
        assert "session_id" in body
        assert body["results"]["total_roi"] == pytest.approx(110.0)

    @pytest.mark.asyncio
    async def test_change_inputs_recomputes(self):
        async with _client() as client:
            session_id = (await client.post("/api/sessions")).json()["session_id"]
            resp = await client.patch(
                f"/api/sessions/{session_id}/inputs", json={"prepayment": 20}
            )
            fetched = await client.get(f"/api/sessions/{session_id}")
        assert resp.status_code == 200
        assert resp.json()["results"]["base_roi"] == pytest.approx(25.0)
        assert fetched.json()["inputs"]["prepayment"] == 20

    @pytest.mark.asyncio
    async def test_change_emits_events(self):
        async with _client() as client:
            session_id = (await client.post("/api/sessions")).json()["session_id"]
            await client.patch(f"/api/sessions/{session_id}/inputs", json={"prepayment": 0})
        event_types = [e.event_type.value for e in stream_manager.buffered(session_id)]
        assert event_types == [
            "session_started",
            "input_changed",
            "recalculation_started",
            "recalculation_completed",
            "roi_undefined",
        ]
        assert [e.sequence_id for e in stream_manager.buffered(session_id)] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_overflowing_change_streams_valid_json(self):
        async with _client() as client:
            session_id = (await client.post("/api/sessions")).json()["session_id"]
            resp = await client.patch(
                f"/api/sessions/{session_id}/inputs",
                json={"annual_wafer_demand": 1e200, "wafer_cost": 1e200},
            )
        assert resp.status_code == 200
        assert resp.json()["results"]["cost_savings"] is None
        events = stream_manager.buffered(session_id)
        assert events[-1].event_type.value == "roi_undefined"
        for event in events:
            sse_str = event.to_sse_string()
            assert "NaN" not in sse_str
            assert "Infinity" not in sse_str

    @pytest.mark.asyncio
    async def test_unknown_input_rejected(self):
        async with _client() as client:
            session_id = (await client.post("/api/sessions")).json()["session_id"]
            resp = await client.patch(
                f"/api/sessions/{session_id}/inputs", json={"yield_rate": 0.9}
            )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_reset(self):
        async with _client() as client:
            session_id = (await client.post("/api/sessions")).json()["session_id"]
            await client.patch(f"/api/sessions/{session_id}/inputs", json={"wafer_cost": 20000})
            resp = await client.post(f"/api/sessions/{session_id}/reset")
        assert resp.json()["inputs"]["wafer_cost"] == 8000

    @pytest.mark.asyncio
    async def test_missing_session_is_404(self):
        async with _client() as client:
            resp = await client.get("/api/sessions/does-not-exist")
            patched = await client.patch("/api/sessions/does-not-exist/inputs", json={})
            streamed = await client.get("/api/sessions/does-not-exist/stream")
        assert resp.status_code == 404
        assert patched.status_code == 404
        assert streamed.status_code == 404

    def test_stream_endpoint_returns_event_stream_content_type(self, server):
        session_id = httpx.post(f"{server.base_url}/api/sessions", timeout=5.0).json()["session_id"]
        with httpx.stream(
            "GET", f"{server.base_url}/api/sessions/{session_id}/stream", timeout=5.0
        ) as resp:
            assert resp.headers["content-type"] == "text/event-stream; charset=utf-8"


class TestAPI:
    @pytest.mark.asyncio
    async def test_cors_allows_localhost_3000(self):
        async with _client() as client:
            resp = await client.options(
                "/api/roi",
                headers={
                    "Origin": "http://localhost:3000",
                    "Access-Control-Request-Method": "POST",
                },
            )
        assert resp.headers.get("access-control-allow-origin") == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_health_check_endpoint(self):
        async with _client() as client:
            resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
