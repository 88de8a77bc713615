"""
Test the FastAPI surface with the editor's camelCase payloads.
"""

import json

import pytest
from fastapi.testclient import TestClient

from framesketch.api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _cantilever_payload(**extra):
    payload = {
        "nodes": [{"id": "n1", "x": 0, "y": 0}, {"id": "n2", "x": 3, "y": 0}],
        "members": [{"id": "m1", "a": "n1", "b": "n2"}],
        "supports": [{"id": "s1", "nodeId": "n1", "type": "fix"}],
        "pointLoads": [{"id": "P1", "nodeId": "n2", "angleDeg": 0, "magnitude": 1000}],
    }
    payload.update(extra)
    return payload


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_analyze_cantilever(client):
    r = client.post("/api/analyze", json=_cantilever_payload())
    assert r.status_code == 200

    body = r.json()
    assert body["validation"]["ok"] is True
    result = body["result"]
    assert result["ok"] is True
    assert result["elements"][0]["memberId"] == "m1"
    assert len(result["elements"][0]["points"]) == 11
    assert result["reactions"][0]["supportId"] == "s1"
    assert result["reactions"][0]["fy"] == pytest.approx(-1000.0, rel=1e-6)
    assert body["summary"]["max_moment"] == pytest.approx(3000.0, rel=1e-6)


def test_analyze_uses_section(client):
    soft = client.post("/api/analyze", json=_cantilever_payload()).json()
    stiff = client.post(
        "/api/analyze",
        json=_cantilever_payload(section={"EA": 1e6, "EI": 2e4}),
    ).json()

    uy_soft = soft["result"]["displacements"][1]["uy"]
    uy_stiff = stiff["result"]["displacements"][1]["uy"]
    assert uy_soft == pytest.approx(2 * uy_stiff, rel=1e-6)


def test_analyze_reports_validation_failure(client):
    r = client.post("/api/analyze", json=_cantilever_payload(supports=[]))
    assert r.status_code == 200

    body = r.json()
    assert body["result"]["ok"] is False
    assert body["result"]["reason"] == "validation"
    assert "No supports" in body["result"]["message"]
    assert "summary" not in body
    assert any(i["code"] == "no_supports" for i in body["validation"]["issues"])


def test_validate_empty_model(client):
    r = client.post("/api/validate", json={})
    assert r.status_code == 200
    assert r.json() == {
        "ok": False,
        "issues": [{"level": "error", "code": "no_members", "message": "The model has no members."}],
    }


def test_unknown_support_type_rejected(client):
    payload = _cantilever_payload(supports=[{"id": "s1", "nodeId": "n1", "type": "hinge"}])
    r = client.post("/api/analyze", json=payload)
    assert r.status_code == 422


def test_non_positive_section_rejected(client):
    r = client.post("/api/analyze", json=_cantilever_payload(section={"EA": 0, "EI": 1}))
    assert r.status_code == 422


def test_analyze_nan_coordinate_returns_failure(client):
    # json.dumps writes a bare NaN token, which the request parser accepts
    payload = _cantilever_payload(nodes=[{"id": "n1", "x": 0, "y": 0}, {"id": "n2", "x": float("nan"), "y": 0}])
    r = client.post(
        "/api/analyze",
        content=json.dumps(payload),
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 200
    assert r.json()["result"]["reason"] == "validation"
