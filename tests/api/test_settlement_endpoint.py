import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient


def test_settlement_endpoint_matches_engine(client: TestClient) -> None:
    response = client.post(
        "/settlement",
        json={
            "results": [
                {"player_id": "A", "net": 30},
                {"player_id": "B", "net": 20},
                {"player_id": "C", "net": -50},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "transfers": [
            {"from_id": "C", "to_id": "A", "amount": 30},
            {"from_id": "C", "to_id": "B", "amount": 20},
        ],
        "unsettled": 0,
    }


def test_settlement_endpoint_empty_input(client: TestClient) -> None:
    response = client.post("/settlement", json={"results": []})

    assert response.status_code == 200
    assert response.json() == {"transfers": [], "unsettled": 0}


def test_settlement_endpoint_reports_imbalance(client: TestClient) -> None:
    response = client.post(
        "/settlement",
        json={"results": [{"player_id": "A", "net": 100}, {"player_id": "B", "net": -60}]},
    )

    assert response.json()["unsettled"] == 40
    assert response.json()["transfers"] == [{"from_id": "B", "to_id": "A", "amount": 60}]


def test_settlement_endpoint_rejects_duplicate_players(client: TestClient) -> None:
    response = client.post(
        "/settlement",
        json={"results": [{"player_id": "A", "net": 10}, {"player_id": "A", "net": -10}]},
    )

    assert response.status_code == 422


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
