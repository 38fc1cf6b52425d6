# tests/test_chat.py

"""
Tests for invite-code chat rooms and the community chat log.
"""

import re
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

import services.chat_rooms as chat_rooms
from core.config import settings
from services.chat_rooms import create_room, evict_idle_rooms, generate_room_code, join_room

CODE_PATTERN = re.compile(r"^[A-Z0-9]{6}$")


def test_generated_codes_are_six_alphanumerics():
    for _ in range(200):
        assert CODE_PATTERN.match(generate_room_code())


def test_create_room_skips_taken_code(fake_db, monkeypatch):
    fake_db.seed("chat_rooms", code="AAAAAA", owner_id="x", members=["x"], version=0)
    codes = iter(["AAAAAA", "BBBBBB"])
    monkeypatch.setattr(chat_rooms, "generate_room_code", lambda: next(codes))

    room = create_room("u1")

    assert room["code"] == "BBBBBB"
    assert room["members"] == ["u1"]


def test_join_unknown_code_returns_false(fake_db):
    assert join_room("ABC123", "u1") is False
    assert fake_db.rows("chat_rooms") == []


def test_create_join_leave_flow(client: TestClient, fake_db):
    created = client.post("/api/chat/rooms", json={"userId": "owner"})
    assert created.status_code == 201
    code = created.json()["code"]
    assert CODE_PATTERN.match(code)

    joined = client.post(f"/api/chat/rooms/{code.lower()}/join", json={"userId": "u2"})
    assert joined.status_code == 200
    assert joined.json()["joined"] is True
    assert joined.json()["room"]["members"] == ["owner", "u2"]

    # joining twice changes nothing
    client.post(f"/api/chat/rooms/{code}/join", json={"userId": "u2"})
    assert fake_db.rows("chat_rooms")[0]["members"] == ["owner", "u2"]

    client.post(f"/api/chat/rooms/{code}/leave", json={"userId": "owner"})
    left = client.post(f"/api/chat/rooms/{code}/leave", json={"userId": "u2"})
    assert left.status_code == 200
    assert left.json()["members"] == []

    # empty rooms survive
    assert client.get(f"/api/chat/rooms/{code}").status_code == 200


def test_join_unknown_room_over_http(client: TestClient, fake_db):
    response = client.post("/api/chat/rooms/ABC123/join", json={"userId": "u1"})
    assert response.status_code == 404
    assert response.json()["joined"] is False


def test_only_members_post_room_messages(client: TestClient, fake_db):
    code = client.post("/api/chat/rooms", json={"userId": "owner"}).json()["code"]
    url = f"/api/chat/rooms/{code}/messages"

    outsider = client.post(url, json={"message": "hi", "senderId": "stranger"})
    assert outsider.status_code == 403

    for text in ["first", "second"]:
        response = client.post(url, json={"message": text, "senderId": "owner", "senderName": "Owner"})
        assert response.status_code == 201

    messages = client.get(url).json()
    assert [m["message"] for m in messages] == ["first", "second"]
    assert all(m["room_code"] == code for m in messages)


def test_community_chat_excludes_room_messages(client: TestClient, fake_db):
    code = client.post("/api/chat/rooms", json={"userId": "owner"}).json()["code"]
    client.post(f"/api/chat/rooms/{code}/messages", json={"message": "private", "senderId": "owner"})

    client.post("/api/chat/messages", json={"message": "hello all", "senderId": "u1"})
    client.post("/api/chat/messages", json={"message": "hi back", "senderId": "u2"})

    messages = client.get("/api/chat/messages").json()
    assert [m["message"] for m in messages] == ["hello all", "hi back"]


def test_evict_idle_rooms(fake_db):
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    stale = (now - timedelta(hours=settings.CHAT_ROOM_IDLE_TTL_HOURS + 1)).isoformat()
    fresh = (now - timedelta(hours=1)).isoformat()

    fake_db.seed("chat_rooms", code="OLD111", owner_id="a", members=[], last_active_at=stale, version=2)
    fake_db.seed("chat_rooms", code="NEW222", owner_id="b", members=[], last_active_at=fresh, version=2)
    fake_db.seed("chat_rooms", code="BUSY33", owner_id="c", members=["c"], last_active_at=stale, version=0)
    fake_db.seed("chat_messages", room_code="OLD111", sender_id="a", message="bye")

    assert evict_idle_rooms(now=now) == 1

    assert sorted(r["code"] for r in fake_db.rows("chat_rooms")) == ["BUSY33", "NEW222"]
    assert fake_db.rows("chat_messages") == []


def test_evict_keeps_room_joined_after_sweep_read(fake_db, monkeypatch):
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    stale = (now - timedelta(hours=settings.CHAT_ROOM_IDLE_TTL_HOURS + 1)).isoformat()
    fake_db.seed("chat_rooms", code="LATE01", owner_id="a", members=[], last_active_at=stale, version=4)
    fake_db.seed("chat_messages", room_code="LATE01", sender_id="a", message="anyone?")

    real_select = chat_rooms.safe_select

    def select_then_join(*args, **kwargs):
        snapshot = real_select(*args, **kwargs)
        room = fake_db.rows("chat_rooms")[0]
        room.update(members=["late"], version=5)
        return snapshot

    monkeypatch.setattr(chat_rooms, "safe_select", select_then_join)

    assert evict_idle_rooms(now=now) == 0

    rooms = fake_db.rows("chat_rooms")
    assert [r["members"] for r in rooms] == [["late"]]
    assert len(fake_db.rows("chat_messages")) == 1
