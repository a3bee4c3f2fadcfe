"""Tests covering registration, login and session refresh."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient


def _register(client: FlaskClient, email: str, role: str = "citizen", **extra):
    payload = {
        "email": email,
        "password": "J1Pass123",
        "name": "Test User",
        "role": role,
    }
    payload.update(extra)
    return client.post("/auth/register", json=payload)


def test_register_citizen_gets_starting_bonus(client: FlaskClient):
    response = _register(client, "citizen@example.com", address="4 Lake View", zone="Ward-15")

    assert response.status_code == 201
    user = response.get_json()["user"]
    assert user["green_points"] == 25
    assert user["role"] == "citizen"
    assert user["zone"] == "Ward-15"
    assert user["address"] == "4 Lake View"
    assert "password" not in user
    assert "password_hash" not in user


@pytest.mark.parametrize("role", ["verifier", "admin"])
def test_register_staff_starts_at_zero(client: FlaskClient, role):
    response = _register(client, f"{role}@example.com", role=role)

    assert response.status_code == 201
    assert response.get_json()["user"]["green_points"] == 0


def test_duplicate_registration_is_rejected(client: FlaskClient, app):
    first = _register(client, "dup@example.com")
    second = _register(client, "dup@example.com", role="admin")

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.get_json()["detail"] == "User already exists"

    response = client.get(f"/users/{first.get_json()['user']['id']}")
    assert response.get_json()["role"] == "citizen"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "x@example.com", "password": "pw", "name": "X"},
        {"email": "x@example.com", "password": "pw", "name": "X", "role": "mayor"},
        {"email": "not-an-email", "password": "pw", "name": "X", "role": "citizen"},
        {"email": "x@example.com", "password": "", "name": "X", "role": "citizen"},
        {"email": "x@example.com", "password": "pw", "name": "   ", "role": "citizen"},
    ],
)
def test_register_validation(client: FlaskClient, payload):
    response = client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.get_json()["detail"] == "invalid data"


def test_login_returns_user_and_token(client: FlaskClient):
    _register(client, "j1@example.com")

    response = client.post(
        "/auth/login",
        json={"email": "j1@example.com", "password": "J1Pass123"},
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["access_token"]
    assert data["user"]["email"] == "j1@example.com"
    assert "password_hash" not in data["user"]


@pytest.mark.parametrize(
    "payload, status_code",
    [
        ({"email": "j1@example.com"}, 400),
        ({"password": "J1Pass123"}, 400),
        ({"email": "j1@example.com", "password": "wrong"}, 401),
        ({"email": "J1@example.com", "password": "J1Pass123"}, 401),
        ({"email": "nobody@example.com", "password": "J1Pass123"}, 401),
    ],
)
def test_login_validation(client: FlaskClient, payload, status_code):
    _register(client, "j1@example.com")

    response = client.post("/auth/login", json=payload)

    assert response.status_code == status_code


def test_me_requires_token(client: FlaskClient):
    response = client.get("/auth/me")

    assert response.status_code == 401


def test_me_returns_current_balance(client: FlaskClient):
    _register(client, "me@example.com")
    token = client.post(
        "/auth/login", json={"email": "me@example.com", "password": "J1Pass123"}
    ).get_json()["access_token"]

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json()["email"] == "me@example.com"
    assert response.get_json()["green_points"] == 25


def test_unknown_user_is_404(client: FlaskClient):
    response = client.get("/users/does-not-exist")

    assert response.status_code == 404
    assert response.get_json()["detail"] == "User not found"


def test_register_token_opens_session(client: FlaskClient):
    body = _register(client, "new@example.com").get_json()

    response = client.get(
        "/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )

    assert response.status_code == 200
    assert response.get_json()["id"] == body["user"]["id"]
