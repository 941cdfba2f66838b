"""Tests for learner progress endpoints."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from codelang.core.security import create_access_token
from codelang.db.models.progress import UserFlashcardProgress


def test_progress_requires_authentication(client: TestClient) -> None:
    response = client.get("/api/v1/progress/card/card-1")

    assert response.status_code == 401
    assert response.json()["error"] == "Not authenticated"


def test_progress_rejects_invalid_token(client: TestClient) -> None:
    response = client.get(
        "/api/v1/progress/card/card-1", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


def test_card_progress_defaults_to_new_state(client: TestClient, auth_headers, db_session) -> None:
    response = client.get("/api/v1/progress/card/card-1", headers=auth_headers)

    assert response.status_code == 200
    payload = response.json()
    assert payload["cardId"] == "card-1"
    assert payload["status"] == "new"
    assert payload["repetitions"] == 0
    assert payload["easeFactor"] == 2.5
    assert payload["intervalDays"] == 0
    assert payload["deckId"] is None
    assert db_session.query(UserFlashcardProgress).count() == 0


def test_update_card_progress_round_trip(client: TestClient, auth_headers, learner) -> None:
    body = {
        "deckId": "deck-1",
        "status": "learning",
        "repetitions": 1,
        "easeFactor": 2.6,
        "intervalDays": 1,
        "nextReviewDate": "2024-03-02T09:00:00Z",
        "lastReviewDate": "2024-03-01T09:00:00Z",
    }

    response = client.put("/api/v1/progress/card/card-1", json=body, headers=auth_headers)

    assert response.status_code == 200
    payload = response.json()
    assert payload["userId"] == str(learner.id)
    assert payload["deckId"] == "deck-1"
    assert payload["status"] == "learning"
    assert payload["easeFactor"] == 2.6

    detail = client.get("/api/v1/progress/card/card-1", headers=auth_headers).json()
    assert detail["repetitions"] == 1
    assert detail["intervalDays"] == 1
    assert datetime.fromisoformat(detail["nextReviewDate"].replace("Z", "+00:00")) == datetime(
        2024, 3, 2, 9, 0, tzinfo=timezone.utc
    )


def test_update_card_progress_requires_deck(client: TestClient, auth_headers) -> None:
    response = client.put(
        "/api/v1/progress/card/card-1", json={"status": "learning"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "deckId is required"


def test_update_rejects_negative_repetitions(client: TestClient, auth_headers) -> None:
    response = client.put(
        "/api/v1/progress/card/card-1",
        json={"deckId": "deck-1", "repetitions": -2},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_deck_progress_lists_only_tracked_cards(client: TestClient, auth_headers) -> None:
    client.put("/api/v1/progress/card/card-1", json={"deckId": "deck-1"}, headers=auth_headers)
    client.put("/api/v1/progress/card/card-2", json={"deckId": "deck-2"}, headers=auth_headers)
    client.get("/api/v1/progress/card/card-3", headers=auth_headers)

    response = client.get("/api/v1/progress/deck-1", headers=auth_headers)

    assert response.status_code == 200
    assert [item["cardId"] for item in response.json()] == ["card-1"]


def test_progress_is_scoped_to_the_learner(client: TestClient, auth_headers, db_session) -> None:
    client.put(
        "/api/v1/progress/card/card-1",
        json={"deckId": "deck-1", "status": "mastered"},
        headers=auth_headers,
    )
    other = {"Authorization": f"Bearer {create_access_token('00000000-0000-0000-0000-000000000001')}"}

    response = client.get("/api/v1/progress/card/card-1", headers=other)

    assert response.status_code == 200
    assert response.json()["status"] == "new"


def test_batch_update_counts_valid_entries(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/api/v1/progress/batch",
        json={
            "progressUpdates": [
                {"deckId": "deck-1", "status": "learning"},
                {"cardId": "card-2", "deckId": "deck-1", "status": "reviewing"},
            ]
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["updatedCount"] == 1
    assert payload["results"][1] == {"cardId": "card-2", "success": True, "error": None}
    assert payload["results"][0]["success"] is False

    stored = client.get("/api/v1/progress/card/card-2", headers=auth_headers).json()
    assert stored["status"] == "reviewing"


def test_batch_update_requires_array(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/api/v1/progress/batch", json={"progressUpdates": "nope"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "progressUpdates array is required"


def test_deck_stats_endpoint(client: TestClient, auth_headers) -> None:
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    future = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
    for card_id, status, next_review in [
        ("card-1", "new", future),
        ("card-2", "reviewing", past),
        ("card-3", "mastered", future),
    ]:
        client.put(
            f"/api/v1/progress/card/{card_id}",
            json={"deckId": "deck-1", "status": status, "nextReviewDate": next_review},
            headers=auth_headers,
        )

    response = client.get(
        "/api/v1/progress/stats/deck-1", params={"totalCards": 5}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "newCount": 3,
        "learningCount": 0,
        "reviewingCount": 1,
        "masteredCount": 1,
        "dueForReviewCount": 1,
    }


def test_deck_stats_defaults_total_to_zero(client: TestClient, auth_headers) -> None:
    response = client.get("/api/v1/progress/stats/deck-1", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["newCount"] == 0
