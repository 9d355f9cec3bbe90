"""Tests for the match server API."""

import json

import pytest
from fastapi.testclient import TestClient

from turnstone.games import GAMES
from turnstone.models import GameDefinition
from turnstone.server.main import app, sessions
from turnstone.server.session import MatchSessionManager


@pytest.fixture
def client():
    return TestClient(app)


def create_match(client, **body):
    """Create a match and return the response JSON."""
    response = client.post("/api/matches", json={"game": "dice-duel", **body})
    assert response.status_code == 200
    return response.json()


def test_health_check(client):
    """Test the API root endpoint."""
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["service"] == "Turnstone"


def test_create_match_hides_seed(client):
    """Test that match creation never returns the seed or generator state."""
    data = create_match(client, seed=0)

    assert data["matchId"].startswith("match-")
    assert data["numPlayers"] == 2
    assert data["state"]["plugins"]["random"]["data"] is None
    assert "seed" not in json.dumps(data)
    assert "prngstate" not in json.dumps(data)


def test_create_match_without_seed(client):
    """Test that an omitted seed is picked on the server."""
    data = create_match(client)
    session = sessions.get(data["matchId"])
    assert isinstance(session.state.plugins["random"].data.seed, int)


def test_create_unknown_game(client):
    """Test that unknown games are 404."""
    response = client.post("/api/matches", json={"game": "chess"})
    assert response.status_code == 404


def test_create_with_invalid_seed_type(client):
    """Test that non-scalar seeds are rejected."""
    response = client.post("/api/matches", json={"game": "dice-duel", "seed": [1, 2]})
    assert response.status_code == 422


def test_move_committed_by_server(client):
    """Test that a roll is committed and visible with redacted plugin data."""
    match_id = create_match(client, seed=0)["matchId"]

    response = client.post(
        f"/api/matches/{match_id}/moves",
        json={"playerID": "0", "move": "roll", "stateID": 0},
    )
    assert response.status_code == 200
    assert response.json()["accepted"] is True
    assert response.json()["stateID"] == 1

    state = client.get(f"/api/matches/{match_id}/state", params={"playerID": "0"}).json()["state"]
    assert len(state["G"]["last_roll"]) == 2
    assert all(1 <= d <= 6 for d in state["G"]["last_roll"])
    assert state["plugins"]["random"]["data"] is None


def test_server_rolls_are_reproducible(client):
    """Test that two matches with the same seed roll the same dice."""
    rolls = []
    for _ in range(2):
        match_id = create_match(client, seed="same")["matchId"]
        client.post(f"/api/matches/{match_id}/moves", json={"playerID": "0", "move": "roll"})
        state = client.get(f"/api/matches/{match_id}/state").json()["state"]
        rolls.append(state["G"]["last_roll"])

    assert rolls[0] == rolls[1]


def test_out_of_turn_move_rejected(client):
    """Test that moves from the wrong player are refused."""
    match_id = create_match(client, seed=0)["matchId"]

    response = client.post(
        f"/api/matches/{match_id}/moves", json={"playerID": "1", "move": "roll"}
    )

    assert response.json()["accepted"] is False
    assert response.json()["stateID"] == 0
    assert response.json()["errors"]


def test_stale_move_rejected(client):
    """Test that moves predicted from an old state are refused."""
    match_id = create_match(client, seed=0)["matchId"]
    client.post(f"/api/matches/{match_id}/moves", json={"playerID": "0", "move": "draw_card"})

    response = client.post(
        f"/api/matches/{match_id}/moves",
        json={"playerID": "0", "move": "roll", "stateID": 0},
    )

    assert response.json()["accepted"] is False
    assert "Stale" in response.json()["errors"][0]


def test_unknown_player_rejected(client):
    """Test that players outside the match are refused."""
    match_id = create_match(client, seed=0)["matchId"]
    response = client.post(
        f"/api/matches/{match_id}/moves", json={"playerID": "7", "move": "roll"}
    )
    assert response.json()["accepted"] is False


def test_player_views_differ(client):
    """Test that each player only sees their own hand."""
    match_id = create_match(client, seed=0)["matchId"]
    client.post(f"/api/matches/{match_id}/moves", json={"playerID": "0", "move": "draw_card"})

    own = client.get(f"/api/matches/{match_id}/state", params={"playerID": "0"}).json()
    other = client.get(f"/api/matches/{match_id}/state", params={"playerID": "1"}).json()

    assert isinstance(own["state"]["G"]["hands"]["0"], list)
    assert other["state"]["G"]["hands"]["0"] == 1
    assert own["state"]["G"]["deck"] is None


def test_missing_match(client):
    """Test 404 for unknown matches."""
    assert client.get("/api/matches/match-missing/state").status_code == 404
    response = client.post(
        "/api/matches/match-missing/moves", json={"playerID": "0", "move": "roll"}
    )
    assert response.status_code == 404


def test_delete_match(client):
    """Test deleting a match."""
    match_id = create_match(client)["matchId"]
    assert client.delete(f"/api/matches/{match_id}").status_code == 200
    assert client.delete(f"/api/matches/{match_id}").status_code == 404


def test_websocket_sends_redacted_state(client):
    """Test that WebSocket viewers get their own redacted state."""
    match_id = create_match(client, seed=0)["matchId"]

    with client.websocket_connect(f"/ws/matches/{match_id}?playerID=0") as websocket:
        message = websocket.receive_json()
        assert message["type"] == "CONNECTED"
        assert message["state"]["plugins"]["random"]["data"] is None

        websocket.send_json({"type": "PING"})
        assert websocket.receive_json() == {"type": "PONG"}


def test_session_manager_rejects_invalid_seed():
    """Test that invalid seeds fail at match creation."""
    manager = MatchSessionManager()
    with pytest.raises(ValueError):
        manager.create_session(seed=float("inf"))
    assert manager.sessions == {}


@pytest.mark.parametrize("result", [3, ["0", "1"], {"winner": "0"}])
def test_any_gameover_result_reported(client, monkeypatch, result):
    """Test that any end_game result is returned with the committed move."""

    def concede(context):
        context.events.end_game(result)

    def create_concede_game(seed=None, num_players=2):
        return GameDefinition(
            name="concede", seed=seed, num_players=num_players, moves={"concede": concede}
        )

    monkeypatch.setitem(GAMES, "concede", create_concede_game)
    match_id = client.post("/api/matches", json={"game": "concede"}).json()["matchId"]

    response = client.post(
        f"/api/matches/{match_id}/moves", json={"playerID": "0", "move": "concede"}
    )

    assert response.status_code == 200
    assert response.json()["accepted"] is True
    assert response.json()["gameover"] == result
