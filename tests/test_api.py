"""
Test the HTTP API against an isolated workspace.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.api.routes import get_workspace
from app.services.workspace import BracketWorkspace

SCENARIO_SETTINGS = {
    "target_bracket_size": 5,
    "kids_max_weight_diff_percent": 10,
    "adults_max_weight_diff_percent": 10,
    "adults_ignore_age_gap": True,
    "max_weight_diff_absolute_cap": 13,
    "ultra_heavy_ignore": False,
}


def entrant_payload(entrant_id, weight, age=25):
    return {
        "id": entrant_id,
        "name": f"Entrant {entrant_id}",
        "academy": "Test Academy",
        "gender": "Male",
        "age": age,
        "weight": weight,
        "belt": "Blue",
        "discipline": "Gi",
    }


@pytest.fixture(name="client")
def client_fixture():
    workspace = BracketWorkspace()
    app.dependency_overrides[get_workspace] = lambda: workspace
    client = TestClient(app)
    client.put("/api/settings", json=SCENARIO_SETTINGS)
    client.put("/api/entrants", json=[
        entrant_payload(f"w{weight}", weight) for weight in (99, 100, 101, 102, 103, 260)
    ])
    yield client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_brackets_built_from_roster(client):
    data = client.get("/api/brackets").json()
    assert len(data["brackets"]) == 1
    assert len(data["brackets"][0]["competitors"]) == 5
    assert [e["id"] for e in data["outliers"]] == ["w260"]
    assert data["outlier_reasons"] == {"w260": "no_valid_group"}


def test_settings_round_trip(client):
    assert client.get("/api/settings").json() == SCENARIO_SETTINGS


def test_invalid_entrant_rejected(client):
    bad = entrant_payload("x", 150)
    bad["belt"] = "Plaid"
    assert client.put("/api/entrants", json=[bad]).status_code == 422


def test_move_unknown_entrant_is_no_op(client):
    before = client.get("/api/brackets").json()
    response = client.post("/api/brackets/move", json={"entrant_id": "nobody", "target": "new"})
    assert response.status_code == 200
    assert response.json()["moved"] is False
    assert client.get("/api/brackets").json() == before


def test_move_and_evict(client):
    bracket_id = client.get("/api/brackets").json()["brackets"][0]["id"]
    response = client.post("/api/brackets/move", json={"entrant_id": "w260", "target": bracket_id})
    body = response.json()
    assert body["moved"] is True
    assert body["evicted_id"] == "w260"

    data = client.get("/api/brackets").json()
    assert data["outlier_reasons"] == {"w260": "evicted"}


def test_move_to_new_bracket(client):
    response = client.post("/api/brackets/move", json={"entrant_id": "w260", "target": "new"})
    target = response.json()["target"]
    data = client.get("/api/brackets").json()
    assert data["brackets"][0]["id"] == target
    assert data["brackets"][0]["is_manual"] is True
    assert data["outliers"] == []


def test_patch_entrant(client):
    response = client.patch("/api/entrants/w99", json={"weight": 0})
    assert response.status_code == 200
    body = response.json()
    assert body["entrant"]["id"] == "w99"
    assert body["result"]["outlier_reasons"]["w99"] == "missing_data"


def test_patch_unknown_entrant(client):
    assert client.patch("/api/entrants/nobody", json={"weight": 150}).status_code == 404


def test_duplicate_entrant(client):
    response = client.post("/api/entrants/w100/duplicate")
    assert response.status_code == 200
    assert response.json()["entrant"]["id"] == "w100-copy"
    assert response.json()["result"]["total_entrants"] == 7
    assert client.post("/api/entrants/nobody/duplicate").status_code == 404


def test_create_and_rename_bracket(client):
    created = client.post("/api/brackets").json()
    assert created["competitors"] == []
    assert created["division"] == "Open"

    response = client.post(f"/api/brackets/{created['id']}/rename", json={"name": "Superfight"})
    assert response.status_code == 200
    assert client.get("/api/brackets").json()["brackets"][0]["name"] == "Superfight"
    assert client.post("/api/brackets/nope/rename", json={"name": "x"}).status_code == 404


def test_can_drop(client):
    bracket_id = client.get("/api/brackets").json()["brackets"][0]["id"]
    response = client.get(f"/api/brackets/{bracket_id}/can-drop/w260")
    assert response.json()["allowed"] is True
    assert client.get("/api/brackets/nope/can-drop/w260").status_code == 404
    assert client.get(f"/api/brackets/{bracket_id}/can-drop/nobody").status_code == 404


def test_settings_change_discards_overrides(client):
    client.post("/api/brackets/move", json={"entrant_id": "w260", "target": "new"})
    revision = client.get("/api/brackets").json()["revision"]

    data = client.put("/api/settings", json=SCENARIO_SETTINGS).json()
    assert data["revision"] == revision + 1
    assert [e["id"] for e in data["outliers"]] == ["w260"]


def test_advisory_payload(client):
    payload = client.get("/api/outliers/advisory-payload").json()
    assert payload == [{
        "name": "Entrant w260", "gender": "Male", "belt": "Blue",
        "age": 25, "weight": 260.0, "academy": "Test Academy",
    }]


def test_audit(client):
    body = client.get("/api/brackets/audit").json()
    assert body["is_valid"] is True
    assert body["violations"] == []
