"""Tests for learner profile endpoints."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from codelang.core.security import create_access_token
from codelang.db.models.user import User
from codelang.services.users import UserService


def test_get_current_user_profile(client: TestClient, auth_headers, learner) -> None:
    for card_id, status in [("c1", "new"), ("c2", "learning"), ("c3", "mastered")]:
        client.put(
            f"/api/v1/progress/card/{card_id}",
            json={"deckId": "deck-1", "status": status},
            headers=auth_headers,
        )

    response = client.get("/api/v1/users/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "learner@example.com"
    assert data["currentStreak"] == 0
    assert data["completedCourseIds"] == []
    assert data["learnedWordsCount"] == 2


def test_profile_of_unknown_user(client: TestClient) -> None:
    headers = {"Authorization": f"Bearer {create_access_token(uuid.uuid4())}"}

    response = client.get("/api/v1/users/me", headers=headers)

    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


def test_update_name_trims_and_validates(client: TestClient, auth_headers) -> None:
    response = client.put("/api/v1/users/name", json={"name": "  Ana  "}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Ana"

    blank = client.put("/api/v1/users/name", json={"name": "   "}, headers=auth_headers)
    assert blank.status_code == 400
    assert blank.json()["error"] == "Name is required"


def test_complete_course_is_idempotent(client: TestClient, auth_headers) -> None:
    first = client.post(
        "/api/v1/users/complete-course", json={"courseId": "basics"}, headers=auth_headers
    )
    second = client.post(
        "/api/v1/users/complete-course", json={"courseId": "basics"}, headers=auth_headers
    )

    assert first.json()["completedCourseIds"] == ["basics"]
    assert second.json()["completedCourseIds"] == ["basics"]

    missing = client.post("/api/v1/users/complete-course", json={}, headers=auth_headers)
    assert missing.status_code == 400


def test_first_streak_completion(client: TestClient, auth_headers) -> None:
    response = client.post("/api/v1/users/streak", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["currentStreak"] == 1
    assert response.json()["lastCompletionDate"] is not None


NOW = datetime(2024, 5, 10, 18, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("last_completion", "streak", "expected"),
    [
        (None, 0, 1),
        (NOW - timedelta(days=1), 4, 5),
        (NOW - timedelta(days=3), 4, 1),
        (NOW.replace(hour=8), 4, 4),
    ],
)
def test_streak_rules(db_session, learner: User, last_completion, streak, expected) -> None:
    learner.current_streak = streak
    learner.last_completion_date = last_completion
    db_session.commit()

    updated = UserService(db_session).complete_streak(learner, now=NOW)

    assert updated.current_streak == expected
    if last_completion is not None and last_completion.date() == NOW.date():
        assert updated.last_completion_date == last_completion
    else:
        assert updated.last_completion_date == NOW
