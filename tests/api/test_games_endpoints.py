import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient


def _create_game(client: TestClient, player_name: str = "alice") -> dict:
    response = client.post("/games", json={"player_name": player_name})
    assert response.status_code == 201
    return response.json()


def test_full_ledger_flow_contract(client: TestClient) -> None:
    game = _create_game(client)
    code = game["game_code"]
    alice_id = game["players"][0]["id"]
    assert set(game.keys()) == {"id", "game_code", "created_at", "players", "buy_ins", "finals"}

    join = client.post("/games/join", json={"game_code": code.lower(), "player_name": "bob"})
    assert join.status_code == 201
    bob_id = join.json()["player"]["id"]
    assert [p["name"] for p in join.json()["game"]["players"]] == ["alice", "bob"]

    for player_id in (alice_id, bob_id):
        buy_in = client.post(f"/games/{code}/players/{player_id}/buyins", json={"amount": 500})
        assert buy_in.status_code == 201
        assert buy_in.json()["amount"] == 500

    assert client.put(f"/games/{code}/players/{alice_id}/final", json={"amount": 725.5}).status_code == 200
    assert client.put(f"/games/{code}/players/{bob_id}/final", json={"amount": 274.5}).status_code == 200

    results = client.get(f"/games/{code}/results")
    assert results.status_code == 200
    body = results.json()
    assert set(body.keys()) == {"game_code", "results", "summary", "transfers", "text"}
    assert {r["name"]: r["net"] for r in body["results"]} == {"alice": 225.5, "bob": -225.5}
    assert body["summary"]["is_balanced"] is True
    assert body["summary"]["all_finals_entered"] is True
    assert body["transfers"] == [
        {
            "from_id": bob_id,
            "to_id": alice_id,
            "from_name": "bob",
            "to_name": "alice",
            "amount": 225.5,
            "line": "bob → alice: ฿225.5",
        }
    ]
    assert body["text"] == "bob → alice: ฿225.5"


def test_join_accepts_padded_lowercase_code(client: TestClient) -> None:
    code = _create_game(client)["game_code"]

    join = client.post("/games/join", json={"game_code": f" {code.lower()} ", "player_name": "bob"})

    assert join.status_code == 201
    assert join.json()["game"]["game_code"] == code


def test_join_with_malformed_code_uses_domain_error_body(client: TestClient) -> None:
    join = client.post("/games/join", json={"game_code": "AB", "player_name": "bob"})

    assert join.status_code == 400
    assert join.json()["detail"]["code"] == "validation_error"


def test_get_game_lists_buy_ins_and_finals(client: TestClient) -> None:
    game = _create_game(client)
    code = game["game_code"]
    player_id = game["players"][0]["id"]

    client.post(f"/games/{code}/players/{player_id}/buyins", json={"amount": 100})
    client.post(f"/games/{code}/players/{player_id}/buyins", json={"amount": 50})
    client.put(f"/games/{code}/players/{player_id}/final", json={"amount": 0})

    fetched = client.get(f"/games/{code.lower()}")
    assert fetched.status_code == 200
    data = fetched.json()
    assert [b["amount"] for b in data["buy_ins"]] == [100, 50]
    assert [f["amount"] for f in data["finals"]] == [0]


def test_add_rename_player_and_delete_buy_in(client: TestClient) -> None:
    code = _create_game(client)["game_code"]

    added = client.post(f"/games/{code}/players", json={"name": " carol "})
    assert added.status_code == 201
    carol_id = added.json()["id"]
    assert added.json()["name"] == "carol"

    renamed = client.patch(f"/games/{code}/players/{carol_id}", json={"name": "Caroline"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Caroline"

    buy_in_id = client.post(f"/games/{code}/players/{carol_id}/buyins", json={"amount": 20}).json()["id"]
    deleted = client.delete(f"/games/{code}/players/{carol_id}/buyins/{buy_in_id}")
    assert deleted.status_code == 204

    missing = client.delete(f"/games/{code}/players/{carol_id}/buyins/{buy_in_id}")
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "not_found"


def test_error_shapes(client: TestClient) -> None:
    unknown = client.get("/games/ZZZZZ")
    assert unknown.status_code == 404
    assert set(unknown.json()["detail"].keys()) == {"code", "message", "details"}
    assert unknown.json()["detail"]["details"] == {"game_code": "ZZZZZ"}

    malformed = client.get("/games/AB-12")
    assert malformed.status_code == 400
    assert malformed.json()["detail"]["code"] == "validation_error"

    code = _create_game(client)["game_code"]
    unknown_player = client.post(f"/games/{code}/players/missing/buyins", json={"amount": 10})
    assert unknown_player.status_code == 404

    blank_name = client.post(f"/games/{code}/players", json={"name": "   "})
    assert blank_name.status_code == 400


@pytest.mark.parametrize("amount", [0, -10])
def test_non_positive_buy_in_rejected_by_schema(client: TestClient, amount: float) -> None:
    game = _create_game(client)
    code = game["game_code"]
    player_id = game["players"][0]["id"]

    response = client.post(f"/games/{code}/players/{player_id}/buyins", json={"amount": amount})

    assert response.status_code == 422


def test_game_code_exhaustion_returns_503(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    from poker_ledger.storage.repository import LedgerRepository

    monkeypatch.setattr(LedgerRepository, "code_exists", lambda self, code: True)

    response = client.post("/games", json={"player_name": "alice"})

    assert response.status_code == 503
    assert response.json()["detail"]["code"] == "game_code_unavailable"
