"""Tests for the FastAPI server: HTTP endpoints, WebSocket protocol, helpers."""

from __future__ import annotations

import json
import math

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client() -> TestClient:
    """Create a FastAPI TestClient (no lifespan, so no frame loop runs)."""
    from server import app
    return TestClient(app)


# ── HTTP endpoints ──────────────────────────────────────────────────────


class TestHTTPEndpoints:
    """Test non-WebSocket HTTP endpoints."""

    def test_index_returns_html(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "weatherCanvas" in resp.text

    def test_api_parameters_lists_sliders(self, client: TestClient) -> None:
        resp = client.get("/api/parameters")
        assert resp.status_code == 200
        names = [p["name"] for p in resp.json()]
        assert names == ["temperature", "intensity", "wind_speed", "cloudiness"]

    def test_api_state_matches_fields(self, client: TestClient) -> None:
        data = client.get("/api/state").json()
        assert data["particles"] == data["state"]["intensity"]
        assert data["clouds"] == data["state"]["cloudiness"]
        assert data["precipitation_kind"] == data["readout"]["precipitation_kind"]


# ── WebSocket endpoint ──────────────────────────────────────────────────


class TestWebSocket:
    """Test the /ws WebSocket endpoint."""

    def test_connect_receives_init(self, client: TestClient) -> None:
        with client.websocket_connect("/ws") as ws:
            data = json.loads(ws.receive_text())
            assert data["type"] == "init"
            assert {"parameters", "state", "readout", "viewport", "frame_rate"} <= set(data)

    def test_set_param_broadcasts_readout(self, client: TestClient) -> None:
        with client.websocket_connect("/ws") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"type": "set_param", "name": "temperature", "value": -5}))
            data = json.loads(ws.receive_text())
            assert data["type"] == "readout"
            assert data["state"]["temperature"] == -5
            assert data["readout"]["precipitation_kind"] == "snow"
            assert data["readout"]["fog"] is True

    def test_set_intensity_resizes_field(self, client: TestClient) -> None:
        from server import particle_field
        with client.websocket_connect("/ws") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"type": "set_param", "name": "intensity", "value": 60}))
            ws.receive_text()
        assert len(particle_field) == 60

    def test_resize_rebuilds_at_new_size(self, client: TestClient) -> None:
        from server import viewport
        with client.websocket_connect("/ws") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"type": "resize", "width": 640, "height": 360}))
            data = json.loads(ws.receive_text())
            assert data["viewport"] == {"width": 640, "height": 360}
        assert (viewport.width, viewport.height) == (640, 360)

    def test_bad_messages_do_not_crash(self, client: TestClient) -> None:
        with client.websocket_connect("/ws") as ws:
            ws.receive_text()
            ws.send_text("not json")
            ws.send_text(json.dumps({"type": "set_param", "name": "humidity", "value": 3}))
            ws.send_text(json.dumps({"type": "set_param", "name": "intensity", "value": "lots"}))
            ws.send_text(json.dumps({"type": "resize", "width": 0, "height": 0}))
            # Connection still serves valid requests afterwards
            ws.send_text(json.dumps({"type": "set_param", "name": "cloudiness", "value": 20}))
            data = json.loads(ws.receive_text())
            assert data["type"] == "readout"
            assert data["state"]["cloudiness"] == 20

    @pytest.mark.parametrize("raw", [
        '{"type": "set_param", "name": "wind_speed", "value": NaN}',
        '{"type": "set_param", "name": "intensity", "value": 1e999}',
        '{"type": "resize", "width": 1e999, "height": 300}',
    ])
    def test_non_finite_values_ignored(self, client: TestClient, raw: str) -> None:
        from server import particle_field, viewport
        with client.websocket_connect("/ws") as ws:
            ws.receive_text()
            ws.send_text(raw)
            # Connection survives and the next valid message is answered
            ws.send_text(json.dumps({"type": "set_param", "name": "cloudiness", "value": 30}))
            data = json.loads(ws.receive_text())
            assert data["type"] == "readout"
            assert data["state"]["cloudiness"] == 30
            assert math.isfinite(data["state"]["wind_speed"])
        assert all(0 <= p.x <= viewport.width for p in particle_field.particles)

    def test_oversized_intensity_clamped(self, client: TestClient) -> None:
        from server import particle_field
        with client.websocket_connect("/ws") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"type": "set_param", "name": "intensity", "value": 10_000_000}))
            data = json.loads(ws.receive_text())
            assert data["state"]["intensity"] == 100
        assert len(particle_field) == 100


# ── Server helpers ──────────────────────────────────────────────────────


class TestServerHelpers:
    """Test module-level helpers."""

    def test_create_rng_seeded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from server import create_rng
        monkeypatch.setenv("WEATHER_SEED", "42")
        assert create_rng().random() == create_rng().random()

    def test_create_rng_unseeded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from server import create_rng
        monkeypatch.delenv("WEATHER_SEED", raising=False)
        assert create_rng().random() != create_rng().random()

    def test_has_clients_false_when_idle(self) -> None:
        from server import has_clients
        assert has_clients() is False

    def test_frame_message_shape(self) -> None:
        from server import animation, viewport
        frame = animation.render_frame()
        msg = frame.to_message()
        assert msg["type"] == "frame"
        assert msg["commands"][0]["op"] == "clear"
        assert (msg["width"], msg["height"]) == (viewport.width, viewport.height)
