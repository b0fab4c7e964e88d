"""Tests for the HTTP/WebSocket hosting service."""

import pytest
from fastapi.testclient import TestClient

from homeworlds.server.main import app, sessions

SETUP_ACTIONS = [
    {"type": "setup:take_star", "color": "blue", "size": 3, "player": "player1"},
    {"type": "setup:take_star", "color": "yellow", "size": 2, "player": "player2"},
    {"type": "setup:take_star", "color": "red", "size": 2, "player": "player1"},
    {"type": "setup:take_star", "color": "blue", "size": 1, "player": "player2"},
    {"type": "setup:take_ship", "color": "green", "size": 3, "player": "player1"},
    {"type": "setup:take_ship", "color": "green", "size": 3, "player": "player2"},
]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    sessions.sessions.clear()


def create_game(client, actions=None):
    body = {"actions": actions} if actions is not None else None
    response = client.post("/api/games", json=body)
    assert response.status_code == 200
    return response.json()["gameId"]


def test_health_check(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_create_game(client):
    response = client.post("/api/games")
    assert response.status_code == 200
    data = response.json()
    assert data["gameId"].startswith("game-")
    assert data["state"]["tag"] == "setup"
    assert data["state"]["activePlayer"] == "player1"


def test_get_state(client):
    game_id = create_game(client)
    response = client.get(f"/api/games/{game_id}/state")
    assert response.status_code == 200
    data = response.json()
    assert data["phase"] == "setup"
    assert data["activePlayer"] == "player1"
    assert data["winner"] is None


def test_unknown_game(client):
    assert client.get("/api/games/game-missing/state").status_code == 404
    assert client.post("/api/games/game-missing/actions", json=SETUP_ACTIONS[0]).status_code == 404


def test_submit_valid_action(client):
    game_id = create_game(client)
    response = client.post(f"/api/games/{game_id}/actions", json=SETUP_ACTIONS[0])
    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is True
    assert data["state"]["activePlayer"] == "player2"


def test_rule_violation_is_structured(client):
    game_id = create_game(client)
    response = client.post(f"/api/games/{game_id}/actions", json=SETUP_ACTIONS[1])
    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is False
    assert data["error"] == {"type": "wrong_player", "expected": "player1", "actual": "player2"}
    assert data["message"]

    log = client.get(f"/api/games/{game_id}/actions").json()
    assert log["actions"] == []


def test_malformed_action_rejected(client):
    game_id = create_game(client)
    bad = {"type": "setup:take_star", "color": "purple", "size": 1, "player": "player1"}
    response = client.post(f"/api/games/{game_id}/actions", json=bad)
    assert response.status_code == 422


def test_full_setup(client):
    game_id = create_game(client)
    for action in SETUP_ACTIONS:
        response = client.post(f"/api/games/{game_id}/actions", json=action)
        assert response.json()["accepted"] is True

    state = client.get(f"/api/games/{game_id}/state").json()
    assert state["phase"] == "normal"
    assert state["activePlayer"] == "player1"

    log = client.get(f"/api/games/{game_id}/actions").json()
    assert log["actions"] == SETUP_ACTIONS


def test_create_game_from_action_log(client):
    game_id = create_game(client, SETUP_ACTIONS[:4])
    state = client.get(f"/api/games/{game_id}/state").json()
    assert state["phase"] == "setup"
    assert len(state["state"]["homeSystems"]["player1"]["stars"]) == 2
    assert len(state["state"]["homeSystems"]["player2"]["stars"]) == 2


def test_create_game_rejects_out_of_turn_log(client):
    log = [
        {"type": "setup:take_star", "color": "blue", "size": 3, "player": "player2"},
        {"type": "setup:take_star", "color": "blue", "size": 2, "player": "player2"},
        {"type": "setup:take_star", "color": "red", "size": 2, "player": "player2"},
        {"type": "setup:take_ship", "color": "red", "size": 1, "player": "player2"},
    ]
    response = client.post("/api/games", json={"actions": log})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["index"] == 0
    assert detail["error"] == {"type": "wrong_player", "expected": "player1", "actual": "player2"}
    assert sessions.sessions == {}


def test_create_game_rejects_third_star(client):
    log = SETUP_ACTIONS[:4] + [
        {"type": "setup:take_star", "color": "yellow", "size": 1, "player": "player1"}
    ]
    response = client.post("/api/games", json={"actions": log})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["index"] == 4
    assert detail["error"] == {"type": "home_system_already_has_two_stars", "player": "player1"}


def test_create_game_rejects_missing_piece(client):
    log = [
        {"type": "setup:take_star", "color": "yellow", "size": 1, "player": p}
        for p in ("player1", "player2", "player1", "player2")
    ]
    response = client.post("/api/games", json={"actions": log})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["index"] == 3
    assert detail["error"] == {"type": "piece_not_in_bank", "color": "yellow", "size": 1}
    assert "Action 3" in detail["message"]


def test_delete_game(client):
    game_id = create_game(client)
    assert client.delete(f"/api/games/{game_id}").status_code == 200
    assert client.delete(f"/api/games/{game_id}").status_code == 404


def test_websocket_receives_applied_actions(client):
    game_id = create_game(client)
    with client.websocket_connect(f"/ws/games/{game_id}") as ws:
        connected = ws.receive_json()
        assert connected["type"] == "CONNECTED"
        assert connected["state"]["tag"] == "setup"

        client.post(f"/api/games/{game_id}/actions", json=SETUP_ACTIONS[0])
        message = ws.receive_json()
        assert message["type"] == "ACTION_APPLIED"
        assert message["action"] == SETUP_ACTIONS[0]
        assert message["state"]["activePlayer"] == "player2"

        ws.send_json({"type": "PING"})
        assert ws.receive_json() == {"type": "PONG"}
