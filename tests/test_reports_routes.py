"""Tests for filing, listing and reviewing reports."""

from __future__ import annotations

from flask.testing import FlaskClient


def _register(client: FlaskClient, email: str, role: str = "citizen", zone=None) -> dict:
    response = client.post(
        "/auth/register",
        json={
            "email": email,
            "password": "secret123",
            "name": email.split("@")[0],
            "role": role,
            "zone": zone,
        },
    )
    assert response.status_code == 201
    return response.get_json()["user"]


def _file(client: FlaskClient, user_id: str, category: str = "dumping") -> dict:
    response = client.post(
        "/reports",
        json={"user_id": user_id, "category": category, "location": "Bus depot"},
    )
    assert response.status_code == 201
    return response.get_json()


def test_create_report_is_pending(client: FlaskClient):
    citizen = _register(client, "citizen@example.com")

    response = client.post(
        "/reports",
        json={
            "user_id": citizen["id"],
            "category": "segregation",
            "location": "Sector 4 park",
            "description": "Wet and dry waste mixed",
            "status": "verified",
            "points": 99,
        },
    )

    assert response.status_code == 201
    report = response.get_json()
    assert report["status"] == "pending"
    assert report["points"] == 0
    assert report["verified_by"] is None
    assert report["description"] == "Wet and dry waste mixed"


def test_create_report_rejects_bad_category(client: FlaskClient):
    citizen = _register(client, "citizen@example.com")

    response = client.post(
        "/reports",
        json={"user_id": citizen["id"], "category": "littering", "location": "x"},
    )

    assert response.status_code == 400
    assert response.get_json()["detail"] == "invalid data"


def test_create_report_for_unknown_user(client: FlaskClient):
    response = client.post(
        "/reports",
        json={"user_id": "ghost", "category": "dumping", "location": "x"},
    )

    assert response.status_code == 404


def test_listing_by_user_zone_and_all(client: FlaskClient):
    ward = _register(client, "ward@example.com", zone="Ward-15")
    elsewhere = _register(client, "elsewhere@example.com", zone="Ward-16")
    unzoned = _register(client, "unzoned@example.com")
    mine = _file(client, ward["id"])
    _file(client, elsewhere["id"])
    _file(client, unzoned["id"])

    by_user = client.get(f"/reports/user/{ward['id']}").get_json()
    by_zone = client.get("/reports/zone/Ward-15").get_json()
    everything = client.get("/reports").get_json()

    assert [r["id"] for r in by_user] == [mine["id"]]
    assert [r["id"] for r in by_zone] == [mine["id"]]
    assert len(everything) == 3
    assert client.get("/reports/zone/Ward-99").get_json() == []


def test_verify_credits_owner(client: FlaskClient):
    citizen = _register(client, "citizen@example.com")
    champion = _register(client, "champion@example.com", role="verifier")
    report = _file(client, citizen["id"], category="composting")

    response = client.patch(
        f"/reports/{report['id']}/verify",
        json={"status": "verified", "verified_by": champion["id"]},
    )

    assert response.status_code == 200
    updated = response.get_json()
    assert updated["status"] == "verified"
    assert updated["points"] == 20
    assert updated["verified_by"] == champion["id"]
    assert client.get(f"/users/{citizen['id']}").get_json()["green_points"] == 45


def test_reject_after_verify_overwrites_status(client: FlaskClient):
    citizen = _register(client, "citizen@example.com")
    report = _file(client, citizen["id"], category="composting")

    client.patch(f"/reports/{report['id']}/verify", json={"status": "verified"})
    response = client.patch(f"/reports/{report['id']}/verify", json={"status": "rejected"})

    assert response.status_code == 200
    assert response.get_json()["status"] == "rejected"
    assert client.get(f"/users/{citizen['id']}").get_json()["green_points"] == 45


def test_verify_unknown_report(client: FlaskClient):
    response = client.patch("/reports/missing/verify", json={"status": "verified"})

    assert response.status_code == 404
    assert response.get_json()["detail"] == "Report not found"


def test_verify_requires_known_status(client: FlaskClient):
    citizen = _register(client, "citizen@example.com")
    report = _file(client, citizen["id"])

    response = client.patch(f"/reports/{report['id']}/verify", json={"status": "approved"})

    assert response.status_code == 400
    assert response.get_json()["detail"] == "invalid data"


def test_verify_with_unknown_reviewer(client: FlaskClient):
    citizen = _register(client, "citizen@example.com")
    report = _file(client, citizen["id"])

    response = client.patch(
        f"/reports/{report['id']}/verify",
        json={"status": "verified", "verified_by": "nobody"},
    )

    assert response.status_code == 404
    assert response.get_json()["detail"] == "User not found"
    [unchanged] = client.get(f"/reports/user/{citizen['id']}").get_json()
    assert unchanged["status"] == "pending"
    assert client.get(f"/users/{citizen['id']}").get_json()["green_points"] == 25
