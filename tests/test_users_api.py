"""Integration tests for the user API endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from kickstart.domain.entities import User
from kickstart.infrastructure.repositories import UserRepository

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _payload(index: int, **overrides) -> dict:
    payload = {
        "username": f"user{index:03d}",
        "email": f"user{index:03d}@example.com",
        "first_name": "Test",
        "last_name": f"User{index:03d}",
        "send_welcome_email": False,
    }
    payload.update(overrides)
    return payload


def _seed_users(session_factory, count: int) -> None:
    with session_factory() as session:
        repository = UserRepository(session)
        for index in range(count):
            repository.create(
                User(
                    id=None,
                    username=f"seed{index:03d}",
                    email=f"seed{index:03d}@example.com",
                    first_name="Seed",
                    last_name=f"User{index:03d}",
                    created_at=BASE + timedelta(minutes=index),
                ),
                auditor_id=1,
            )


def test_user_crud_flow(client: TestClient, outbox) -> None:
    """Exercise the full CRUD lifecycle for users."""

    response = client.post(
        "/users/",
        json=_payload(1, send_welcome_email=True),
        headers={"X-User-Id": "42"},
    )
    assert response.status_code == 201
    created = response.json()
    user_id = created["id"]
    assert created["created_by"] == 42
    assert created["updated_by"] == 42
    assert created["display_name"] == "Test User001 (@user001)"
    assert created["age_in_days"] == 0
    assert created["modified_recently"] is True
    assert created["modified_after_creation"] is False
    assert [item["recipient"] for item in outbox] == ["user001@example.com"]

    response = client.get(f"/users/{user_id}")
    assert response.status_code == 200
    assert response.json()["email"] == "user001@example.com"

    response = client.get("/users/by-username/user001")
    assert response.status_code == 200
    assert response.json()["id"] == user_id

    response = client.put(f"/users/{user_id}", json={"first_name": "Updated"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["first_name"] == "Updated"
    assert updated["created_by"] == 42
    assert updated["updated_by"] == 1
    assert updated["created_at"] == created["created_at"]

    response = client.delete(f"/users/{user_id}")
    assert response.status_code == 204

    response = client.get(f"/users/{user_id}")
    assert response.status_code == 404

    history = client.get(f"/audit-logs/entity/User/{user_id}").json()
    assert [entry["action"] for entry in history] == [
        "USER_CREATED",
        "USER_UPDATED",
        "USER_DELETED",
    ]


def test_duplicate_users_are_rejected(client: TestClient) -> None:
    assert client.post("/users/", json=_payload(1)).status_code == 201

    response = client.post("/users/", json=_payload(1, email="other@example.com"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Username is already taken"

    response = client.post("/users/", json=_payload(2, email="user001@EXAMPLE.com"))
    assert response.status_code == 400


def test_missing_user_operations_return_404(client: TestClient) -> None:
    assert client.get("/users/999").status_code == 404
    assert client.put("/users/999", json={"first_name": "X"}).status_code == 404
    assert client.delete("/users/999").status_code == 404
    assert client.get("/users/by-username/nobody").status_code == 404


def test_update_rejects_unknown_fields(client: TestClient) -> None:
    user_id = client.post("/users/", json=_payload(1)).json()["id"]

    response = client.put(f"/users/{user_id}", json={"password": "secret"})

    assert response.status_code == 422


def test_listing_defaults_to_twenty_newest_users(client: TestClient, session_factory) -> None:
    _seed_users(session_factory, 25)

    response = client.get("/users/")

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 0
    assert body["size"] == 20
    assert body["total_elements"] == 25
    assert body["total_pages"] == 2
    assert body["first"] is True
    assert body["last"] is False
    assert body["sort"] == ["created_at,desc"]
    usernames = [item["username"] for item in body["content"]]
    assert usernames == [f"seed{index:03d}" for index in range(24, 4, -1)]


def test_listing_caps_page_size(client: TestClient, session_factory) -> None:
    _seed_users(session_factory, 105)

    body = client.get("/users/", params={"size": 500}).json()

    assert body["size"] == 100
    assert len(body["content"]) == 100
    assert body["total_pages"] == 2


@pytest.mark.parametrize("params", [{"page": "abc", "size": "-3"}, {"page": "-1", "size": "0"}])
def test_listing_recovers_from_malformed_parameters(
    client: TestClient, session_factory, params
) -> None:
    _seed_users(session_factory, 3)

    response = client.get("/users/", params=params)

    assert response.status_code == 200
    assert response.json()["page"] == 0
    assert response.json()["size"] == 20


def test_listing_accepts_explicit_sort_and_paging(client: TestClient, session_factory) -> None:
    _seed_users(session_factory, 5)

    body = client.get(
        "/users/", params={"sort": "username,asc", "size": 2, "page": 1}
    ).json()

    assert [item["username"] for item in body["content"]] == ["seed002", "seed003"]
    assert body["sort"] == ["username,asc"]


def test_listing_rejects_unknown_sort_property(client: TestClient) -> None:
    response = client.get("/users/", params={"sort": "password,asc"})

    assert response.status_code == 400


def test_search_matches_names_case_insensitively(client: TestClient) -> None:
    client.post("/users/", json=_payload(1, first_name="Grace", last_name="Hopper"))
    client.post("/users/", json=_payload(2, first_name="Alan", last_name="Turing"))

    body = client.get("/users/search", params={"query": "HOP"}).json()

    assert body["total_elements"] == 1
    assert body["content"][0]["last_name"] == "Hopper"


@pytest.mark.parametrize(
    "params",
    [{"page": "99999999999999999999"}, {"page": "9223372036854775807", "size": "100"}],
)
def test_listing_far_past_the_end_returns_an_empty_page(
    client: TestClient, session_factory, params
) -> None:
    _seed_users(session_factory, 3)

    response = client.get("/users/", params=params)

    assert response.status_code == 200
    body = response.json()
    assert body["content"] == []
    assert body["total_elements"] == 3
    assert body["last"] is True


def test_create_losing_a_uniqueness_race_returns_400(client: TestClient, monkeypatch) -> None:
    assert client.post("/users/", json=_payload(1)).status_code == 201
    # Both lookups miss, as they would for a request racing the first insert.
    monkeypatch.setattr(UserRepository, "get_by_username", lambda self, username: None)
    monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)

    response = client.post("/users/", json=_payload(1))

    assert response.status_code == 400
    assert response.json()["detail"] == "Username or email address is already registered"
