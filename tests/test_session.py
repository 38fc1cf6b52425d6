# tests/test_session.py

"""
Tests for login/signup and role reconciliation.
"""

import pytest
from fastapi.testclient import TestClient

from core.config import settings
from core.security import decode_access_token, hash_password
from services.session import normalize_user_id, reconcile_session_user


@pytest.fixture
def seeded_user(fake_db):
    return fake_db.seed(
        "users",
        id="u9",
        name="Nine",
        email="u9@example.com",
        password=hash_password("secret99"),
    )


def test_normalize_user_id_priority():
    assert normalize_user_id({"_id": "a", "uid": "b", "id": "c"}) == "a"
    assert normalize_user_id({"uid": "b", "id": "c"}) == "b"
    assert normalize_user_id({"id": "c"}) == "c"
    assert normalize_user_id({}) == ""


def test_reconcile_uses_display_name_and_existing_role(fake_db):
    fake_db.seed("user_roles", user_id="u1", role="owner", assigned_by="admin")

    user = reconcile_session_user({"uid": "u1", "displayName": "Ana", "email": "ana@example.com"})

    assert user.uid == "u1"
    assert user.name == "Ana"
    assert user.role.value == "owner"


def test_login_provisions_tenant_role(client: TestClient, fake_db, seeded_user):
    response = client.post("/api/users/login", json={"email": "u9@example.com", "password": "secret99"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["uid"] == "u9"
    assert body["user"]["role"] == "tenant"
    assert body["user"]["lastLogin"] is not None
    assert decode_access_token(body["access_token"])["sub"] == "u9"

    roles = fake_db.rows("user_roles")
    assert len(roles) == 1
    assert roles[0]["user_id"] == "u9"
    assert roles[0]["role"] == "tenant"
    assert roles[0]["assigned_by"] == "system"

    # second lookup finds the persisted row
    client.post("/api/users/login", json={"email": "u9@example.com", "password": "secret99"})
    assert len(fake_db.rows("user_roles")) == 1

    role = client.get("/api/user-roles/u9")
    assert role.status_code == 200
    assert role.json()["userId"] == "u9"
    assert role.json()["role"] == "tenant"


def test_login_without_auto_provisioning_is_refused(client: TestClient, fake_db, seeded_user, monkeypatch):
    monkeypatch.setattr(settings, "AUTO_PROVISION_ROLES", False)

    response = client.post("/api/users/login", json={"email": "u9@example.com", "password": "secret99"})

    assert response.status_code == 403
    assert fake_db.rows("user_roles") == []


def test_login_invalid_credentials(client: TestClient, fake_db, seeded_user):
    response = client.post("/api/users/login", json={"email": "u9@example.com", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_failure_is_reported(client: TestClient, fake_db, seeded_user, monkeypatch):
    def boom(user_id):
        raise RuntimeError("connection reset")

    monkeypatch.setattr("services.session.resolve_role", boom)

    response = client.post("/api/users/login", json={"email": "u9@example.com", "password": "secret99"})

    assert response.status_code == 500
    assert response.json()["message"] == "Login failed: connection reset"


def test_login_rate_limited(client: TestClient, fake_db):
    for _ in range(10):
        client.post("/api/users/login", json={"email": "nobody@example.com", "password": "x"})

    response = client.post("/api/users/login", json={"email": "nobody@example.com", "password": "x"})
    assert response.status_code == 429


def test_signup_creates_profile_role_and_session(client: TestClient, fake_db):
    response = client.post(
        "/api/users/signup",
        json={"name": "Olu", "email": "Olu@Example.com", "password": "hunter22", "role": "owner"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["role"] == "owner"
    assert body["user"]["email"] == "olu@example.com"

    stored = fake_db.rows("users")[0]
    assert stored["password"] != "hunter22"
    assert fake_db.rows("user_roles")[0]["assigned_by"] == "signup"

    duplicate = client.post(
        "/api/users/signup",
        json={"name": "Olu", "email": "olu@example.com", "password": "hunter22"},
    )
    assert duplicate.status_code == 400


def test_admin_self_signup_blocked(client: TestClient, fake_db):
    response = client.post(
        "/api/users/signup",
        json={"name": "Eve", "email": "eve@example.com", "password": "hunter22", "role": "admin"},
    )

    assert response.status_code == 403
    assert fake_db.rows("users") == []


def test_users_list_filters_by_email_and_hides_password(client: TestClient, fake_db, seeded_user):
    fake_db.seed("users", id="u2", name="Two", email="two@example.com", password="x")
    fake_db.seed("user_roles", user_id="u2", role="owner")

    response = client.get("/api/users", params={"email": "TWO@example.com"})

    assert response.status_code == 200
    users = response.json()
    assert [u["id"] for u in users] == ["u2"]
    assert users[0]["role"] == "owner"
    assert "password" not in users[0]


def test_profile_email_change_is_normalized(client: TestClient, fake_db, seeded_user):
    fake_db.seed("users", id="u2", name="Two", email="two@example.com", password="x")

    response = client.put("/api/users/u9", json={"email": "  Bob@Example.com "})

    assert response.status_code == 200
    assert response.json()["email"] == "bob@example.com"
    assert fake_db.rows("users")[0]["email"] == "bob@example.com"

    login = client.post("/api/users/login", json={"email": "bob@example.com", "password": "secret99"})
    assert login.status_code == 200

    taken = client.put("/api/users/u2", json={"email": "BOB@example.com"})
    assert taken.status_code == 400
    assert taken.json()["message"] == "Email already registered"


def test_role_upsert_accepts_camel_case(client: TestClient, fake_db):
    response = client.post("/api/user-roles", json={"userId": "u5", "role": "owner"})
    assert response.status_code == 200

    client.post("/api/user-roles", json={"userId": "u5", "role": "admin", "assignedBy": "ops"})

    roles = fake_db.rows("user_roles")
    assert len(roles) == 1
    assert roles[0]["role"] == "admin"
    assert roles[0]["assigned_by"] == "ops"


def test_role_upsert_requires_admin_with_token(client: TestClient, fake_db, auth_header):
    response = client.post(
        "/api/user-roles",
        json={"userId": "u5", "role": "admin"},
        headers=auth_header("u5", "tenant"),
    )
    assert response.status_code == 403


def test_get_missing_role_is_404(client: TestClient, fake_db):
    response = client.get("/api/user-roles/ghost")
    assert response.status_code == 404
    assert response.json()["message"] == "Role not found"


def test_role_migration(client: TestClient, fake_db, admin_headers):
    fake_db.seed("users", id="a", name="A", email="a@example.com", role="owner")
    fake_db.seed("users", id="b", name="B", email="b@example.com")
    fake_db.seed("users", id="c", name="C", email="c@example.com", role="wizard")

    response = client.post("/api/user-roles/migrate", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"migrated": 1, "skipped": 1, "errors": 1}
    assert fake_db.rows("user_roles")[0]["assigned_by"] == "migration_script"
    assert fake_db.rows("users")[0]["role"] is None


def test_role_migration_requires_token(client: TestClient, fake_db):
    assert client.post("/api/user-roles/migrate").status_code == 401
