"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pathedit.dependencies import create_workspace, get_workspace
from pathedit.main import app
from tests.conftest import SQUARE_CANONICAL, SQUARE_D, TRIANGLE_D


@pytest.fixture
def client():
    workspace = create_workspace()
    app.dependency_overrides[get_workspace] = lambda: workspace
    yield TestClient(app)
    app.dependency_overrides.clear()


def _insert(client, d=SQUARE_D, **extra) -> dict:
    response = client.post("/api/paths", json={"d": d, **extra})
    assert response.status_code == 200
    return response.json()["path"]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["paths"] == 0


def test_normalize(client):
    response = client.post("/api/normalize", json={"d": SQUARE_D})
    assert response.status_code == 200
    data = response.json()
    assert data["valid"]
    assert data["d"] == SQUARE_CANONICAL
    assert data["vertex_count"] == 4
    assert data["edge_count"] == 4
    assert data["closed"]
    assert data["bbox"] == {"x": 0, "y": 0, "width": 10, "height": 10}


def test_normalize_invalid(client):
    data = client.post("/api/normalize", json={"d": "M 5 5"}).json()
    assert data["valid"] is False
    assert data["bbox"] is None


def test_scale(client):
    data = client.post("/api/scale", json={"d": "M 1 2 A 3 3 45 0 1 4 5", "scale": 2}).json()
    assert data["d"] == "M 2 4 A 6 6 45 0 1 8 10"


def test_create_and_list_paths(client):
    first = _insert(client)
    assert first["index"] == 0
    assert len(first["vertices"]) == 4
    assert first["edges"][0]["kind"] == "L"
    second = _insert(client, TRIANGLE_D, index=0, selected=True)
    assert second["index"] == 0
    assert second["selected"]

    paths = client.get("/api/paths").json()["paths"]
    assert [p["id"] for p in paths] == [second["id"], first["id"]]
    assert client.get("/api/paths/1").json()["d"] == SQUARE_CANONICAL


def test_create_invalid_path(client):
    data = client.post("/api/paths", json={"d": "nonsense"}).json()
    assert data == {"created": False, "path": None}


def test_missing_path_is_404(client):
    assert client.get("/api/paths/0").status_code == 404
    assert client.delete("/api/paths/3").status_code == 404
    assert client.post("/api/paths/0/transform", json={}).status_code == 404


def test_invalid_payload_is_422(client):
    assert client.post("/api/paths", json={"selected": True}).status_code == 422


def test_delete_and_clear(client):
    _insert(client)
    _insert(client)
    assert client.delete("/api/paths/0").json()["ok"]
    assert len(client.get("/api/paths").json()["paths"]) == 1
    client.delete("/api/paths")
    assert client.get("/api/paths").json()["paths"] == []


def test_transform(client):
    _insert(client)
    data = client.post("/api/paths/0/transform", json={"offset": [5, 0]}).json()
    assert data["path"]["bbox"] == {"x": 5, "y": 0, "width": 10, "height": 10}
    data = client.post("/api/paths/0/transform", json={"scale_x": 2, "center": [5, 0]}).json()
    assert data["path"]["bbox"]["width"] == 20


def test_select(client):
    _insert(client, selected=True)
    _insert(client)
    client.post("/api/paths/1/select")
    paths = client.get("/api/paths").json()["paths"]
    assert [p["selected"] for p in paths] == [False, True]


def test_rect(client):
    data = client.post("/api/paths/rect", json={"left": 0, "top": 0, "right": 10, "bottom": 10}).json()
    assert data["created"]
    assert data["path"]["d"] == SQUARE_CANONICAL
    assert data["path"]["selected"]


def test_split_and_delete_vertex(client):
    path = _insert(client)
    edge_id = path["edges"][0]["id"]
    data = client.post(f"/api/paths/0/edges/{edge_id}/split", json={"x": 5, "y": 0}).json()
    assert data["ok"]
    assert data["path"]["d"] == "M 0 0 L 5 0 L 10 0 L 10 10 L 0 10 L 0 0 Z"

    data = client.delete(f"/api/paths/0/vertices/{data['vertex_id']}").json()
    assert data["ok"]
    assert data["path"]["d"] == SQUARE_CANONICAL

    assert not client.post("/api/paths/0/edges/999/split", json={"x": 0, "y": 0}).json()["ok"]
    assert not client.delete("/api/paths/0/vertices/999").json()["ok"]


def test_deleting_last_vertices_removes_path(client):
    path = _insert(client, "M 0 0 L 10 0 Z")
    data = client.delete(f"/api/paths/0/vertices/{path['vertices'][0]['id']}").json()
    assert data == {"ok": True, "path": None}
    assert client.get("/api/paths").json()["paths"] == []


def test_keys(client):
    _insert(client, selected=True)
    assert client.post("/api/keys", json={"key": "ArrowDown"}).json()["ok"]
    assert client.get("/api/paths/0").json()["bbox"]["y"] == 5
    assert not client.post("/api/keys", json={"key": "F1"}).json()["ok"]


def test_session_drag(client):
    path = _insert(client)
    vertex = path["vertices"][2]
    target = {"kind": "vertex", "path_id": path["id"], "item_id": vertex["id"]}
    data = client.post("/api/session/begin", json={"target": target, "x": 10, "y": 10}).json()
    assert data == {"ok": True, "active": True, "kind": "vertex", "action": "move"}
    client.post("/api/session/move", json={"x": 20, "y": 30})
    data = client.post("/api/session/commit", json={}).json()
    assert data["ok"] and not data["active"]
    moved = client.get("/api/paths/0").json()["vertices"][2]
    assert (moved["x"], moved["y"]) == (20, 30)


def test_session_cancel_create(client):
    client.post("/api/session/begin", json={"target": {"kind": "root"}, "x": 20, "y": 20})
    client.post("/api/session/move", json={"x": 60, "y": 60})
    assert len(client.get("/api/paths").json()["paths"]) == 1
    assert client.post("/api/session/cancel").json()["ok"]
    assert client.get("/api/paths").json()["paths"] == []
    assert not client.post("/api/session/cancel").json()["ok"]


def test_session_double_click(client):
    path = _insert(client)
    target = {"kind": "edge", "path_id": path["id"], "item_id": path["edges"][0]["id"]}
    assert client.post("/api/session/dblclick", json={"target": target, "x": 5, "y": 0}).json()["ok"]
    assert len(client.get("/api/paths/0").json()["vertices"]) == 5


def test_events(client):
    _insert(client)
    client.post("/api/paths/0/transform", json={"offset": [1, 1]})
    client.delete("/api/paths/0")
    events = client.get("/api/events").json()["events"]
    assert [e["kind"] for e in events] == ["insert", "transform", "remove"]
    assert events[0]["index"] == 0
    assert events[2]["index"] == 0


def test_delete_key_during_drag_ends_session(client):
    path = _insert(client)
    target = {"kind": "path", "path_id": path["id"]}
    client.post("/api/session/begin", json={"target": target, "x": 5, "y": 5})
    client.post("/api/session/move", json={"x": 6, "y": 6})
    assert client.post("/api/keys", json={"key": "Delete"}).json()["ok"]
    response = client.post("/api/session/move", json={"x": 8, "y": 8})
    assert response.status_code == 200
    assert response.json() == {"ok": False, "active": False, "kind": None, "action": None}


def test_removing_path_during_drag_ends_session(client):
    path = _insert(client)
    vertex = path["vertices"][2]
    target = {"kind": "vertex", "path_id": path["id"], "item_id": vertex["id"]}
    client.post("/api/session/begin", json={"target": target, "x": 10, "y": 10})
    assert client.delete("/api/paths/0").json()["ok"]
    response = client.post("/api/session/move", json={"x": 12, "y": 12})
    assert response.status_code == 200
    assert not response.json()["active"]
    assert not client.post("/api/session/cancel").json()["ok"]


def test_vertex_double_click_during_drag_reverts_drag(client):
    path = _insert(client)
    vertex = path["vertices"][2]
    target = {"kind": "vertex", "path_id": path["id"], "item_id": vertex["id"]}
    client.post("/api/session/begin", json={"target": target, "x": 10, "y": 10})
    client.post("/api/session/move", json={"x": 20, "y": 20})
    assert client.post("/api/session/dblclick", json={"target": target, "x": 20, "y": 20}).json()["ok"]
    assert client.post("/api/session/move", json={"x": 30, "y": 30}).status_code == 200
    assert len(client.get("/api/paths/0").json()["vertices"]) == 3
