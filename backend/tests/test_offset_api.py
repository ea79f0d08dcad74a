"""
Tests for the offset HTTP endpoints.

These tests use FastAPI's TestClient to exercise the application
without running a real server.
"""

from __future__ import annotations

import sys
from pathlib import Path
import math

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from polyoffset.main import app  # type: ignore
from polyoffset.services import regions
from polyoffset.services.offset_cache import clear_offset_cache


TRIANGLE = [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 0.0]]


@pytest.fixture
def client() -> TestClient:
    clear_offset_cache()
    return TestClient(app)


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_offset_triangle(client: TestClient) -> None:
    """Shrinking the unit triangle returns one ring and its area."""
    resp = client.post("/api/offset", json={"points": TRIANGLE, "offset": -0.1, "arcResolution": 10.0})
    assert resp.status_code == 200
    data = resp.json()
    assert data["meta"]["totalRings"] == 1
    assert data["meta"]["totalPoints"] == 4
    assert data["meta"]["cached"] is False
    ring = data["rings"][0]
    assert ring["index"] == 0
    assert ring["points"][0] == ring["points"][-1]
    assert math.isclose(ring["points"][1][1], 0.7585786437626904, abs_tol=1e-9)
    side = 0.7585786437626904 - 0.1
    assert math.isclose(ring["area"], 0.5 * side * side, rel_tol=1e-6)


def test_repeated_request_is_cached(client: TestClient) -> None:
    body = {"points": TRIANGLE, "offset": 0.1, "arcResolution": 10.0}
    first = client.post("/api/offset", json=body).json()
    second = client.post("/api/offset", json=body).json()
    assert first["meta"]["cached"] is False
    assert second["meta"]["cached"] is True
    assert first["meta"]["cacheEntries"] == second["meta"]["cacheEntries"] == 1
    assert first["rings"] == second["rings"]


def test_open_ring_is_closed(client: TestClient) -> None:
    closed = client.post("/api/offset", json={"points": TRIANGLE, "offset": -0.1, "arcResolution": 10.0})
    opened = client.post("/api/offset", json={"points": TRIANGLE[:-1], "offset": -0.1, "arcResolution": 10.0})
    assert opened.status_code == 200
    assert opened.json()["rings"] == closed.json()["rings"]


def test_empty_ring(client: TestClient) -> None:
    resp = client.post("/api/offset", json={"points": [], "offset": 0.0, "arcResolution": 10.0})
    assert resp.status_code == 200
    data = resp.json()
    assert data["rings"] == [{"index": 0, "points": [], "area": 0.0}]


def test_invalid_arc_resolution(client: TestClient) -> None:
    resp = client.post("/api/offset", json={"points": TRIANGLE, "offset": 1.0, "arcResolution": 0.0})
    assert resp.status_code == 422


def test_invalid_point(client: TestClient) -> None:
    resp = client.post("/api/offset", json={"points": [[0.0, 0.0, 1.0]], "offset": 1.0})
    assert resp.status_code == 400


def test_combinatorial_explosion_maps_to_422(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(regions, "MAX_INTERSECTIONS", 0)
    resp = client.post("/api/offset", json={"points": TRIANGLE, "offset": -0.1, "arcResolution": 10.0})
    assert resp.status_code == 422
    assert "Combinatorial explosion." in resp.json()["detail"]


def test_export_csv(client: TestClient) -> None:
    resp = client.post(
        "/api/offset/export", json={"points": TRIANGLE, "offset": -0.1, "arcResolution": 10.0}
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().split("\n")
    assert lines[0] == "ring,x,y"
    assert len(lines) == 5
    assert all(line.startswith("0,") for line in lines[1:])
