# tests/test_events.py

"""
Tests for community events and RSVPs.
"""

import pytest
from fastapi.testclient import TestClient

from services.events import upsert_rsvp


@pytest.fixture
def event(client: TestClient, fake_db):
    response = client.post(
        "/api/events",
        json={
            "title": "Diwali Night",
            "description": "Lights on the terrace",
            "date": "2024-11-01T18:00:00Z",
        },
    )
    assert response.status_code == 201
    return response.json()


def test_upsert_rsvp_overwrites_in_place():
    rsvps = [{"user_id": "u1", "status": "yes"}, {"user_id": "u2", "status": "no"}]

    updated = upsert_rsvp(rsvps, "u1", "no")

    assert updated == [{"user_id": "u1", "status": "no"}, {"user_id": "u2", "status": "no"}]
    assert rsvps[0]["status"] == "yes"


def test_rsvp_then_change_mind(client: TestClient, fake_db, event):
    url = f"/api/events/{event['id']}/rsvp"

    first = client.post(url, json={"userId": "u1", "status": "yes"})
    assert first.status_code == 200
    assert first.json()["attendee_count"] == 1

    client.post(url, json={"userId": "u2", "status": "yes"})
    again = client.post(url, json={"userId": "u1", "status": "no"})

    body = again.json()
    assert body["attendee_count"] == 1
    assert [r["user_id"] for r in body["rsvps"]] == ["u1", "u2"]
    assert body["rsvps"][0]["status"] == "no"


def test_rsvp_is_idempotent(client: TestClient, fake_db, event):
    url = f"/api/events/{event['id']}/rsvp"
    client.post(url, json={"userId": "u1", "status": "yes"})
    client.post(url, json={"userId": "u1", "status": "yes"})

    assert fake_db.rows("events")[0]["rsvps"] == [{"user_id": "u1", "status": "yes"}]


def test_rsvp_rejects_unknown_status(client: TestClient, fake_db, event):
    response = client.post(f"/api/events/{event['id']}/rsvp", json={"userId": "u1", "status": "maybe"})
    assert response.status_code == 400


def test_rsvp_unknown_event(client: TestClient, fake_db):
    response = client.post("/api/events/nope/rsvp", json={"userId": "u1", "status": "yes"})
    assert response.status_code == 404


def test_events_listed_newest_first(client: TestClient, fake_db, event):
    client.post(
        "/api/events",
        json={"title": "Holi", "description": "Colours", "date": "2025-03-14T10:00:00Z"},
    )

    titles = [e["title"] for e in client.get("/api/events").json()]
    assert titles == ["Holi", "Diwali Night"]


def test_event_creation_forbidden_for_tenant(client: TestClient, fake_db, auth_header):
    response = client.post(
        "/api/events",
        json={"title": "x", "description": "y", "date": "2025-01-01T00:00:00Z"},
        headers=auth_header("u1", "tenant"),
    )
    assert response.status_code == 403


def test_owner_creates_event_as_themselves(client: TestClient, fake_db, auth_header):
    response = client.post(
        "/api/events",
        json={"title": "Cleanup", "description": "Bring gloves", "date": "2025-01-01T09:00:00Z"},
        headers=auth_header("o1", "owner"),
    )
    assert response.status_code == 201
    assert response.json()["created_by"] == "o1"
