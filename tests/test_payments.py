# tests/test_payments.py

"""
Tests for payment records and the Razorpay checkout endpoints.
"""

import hashlib
import hmac
from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from core.config import settings
from core.razorpay_helpers import verify_payment_signature

SECRET = "rzp_test_secret"


def razorpay_signature(order_id: str, payment_id: str, secret: str = SECRET) -> str:
    """What Razorpay checkout sends back for a genuine payment."""
    return hmac.new(secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


@pytest.fixture
def razorpay_keys(monkeypatch):
    monkeypatch.setattr(settings, "RAZORPAY_KEY_ID", "rzp_test_key")
    monkeypatch.setattr(settings, "RAZORPAY_KEY_SECRET", SECRET)


@pytest.fixture
def payment(client: TestClient, fake_db):
    response = client.post(
        "/api/payments",
        json={"tenant_id": "t1", "property_id": "p1", "booking_id": "b1", "amount": 2000},
    )
    assert response.status_code == 201
    return response.json()


def test_signature_check(razorpay_keys):
    good = razorpay_signature("order_1", "pay_1")

    assert verify_payment_signature("order_1", "pay_1", good)
    assert not verify_payment_signature("order_1", "pay_2", good)
    assert not verify_payment_signature("order_1", "pay_1", razorpay_signature("order_1", "pay_1", "other-secret"))
    assert not verify_payment_signature("order_1", "pay_1", "forged")


def test_signature_check_without_keys(monkeypatch):
    monkeypatch.setattr(settings, "RAZORPAY_KEY_SECRET", None)

    with pytest.raises(HTTPException) as exc:
        verify_payment_signature("order_1", "pay_1", "sig")
    assert exc.value.status_code == 500


def test_payment_recorded_pending_with_date(payment):
    assert payment["status"] == "pending"
    assert payment["date"] is not None


def test_verify_payment_settles_row(client: TestClient, fake_db, razorpay_keys, payment):
    response = client.post(
        "/api/payments/verify-payment",
        json={
            "razorpay_order_id": "order_1",
            "razorpay_payment_id": "pay_1",
            "razorpay_signature": razorpay_signature("order_1", "pay_1", SECRET),
            "payment_id": payment["id"],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["payment"]["status"] == "completed"
    assert body["payment"]["razorpay_payment_id"] == "pay_1"


def test_verify_payment_bad_signature_fails_row(client: TestClient, fake_db, razorpay_keys, payment):
    response = client.post(
        "/api/payments/verify-payment",
        json={
            "razorpay_order_id": "order_1",
            "razorpay_payment_id": "pay_1",
            "razorpay_signature": "forged",
            "payment_id": payment["id"],
        },
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid signature"
    assert fake_db.rows("payments")[0]["status"] == "failed"


def test_verify_payment_without_row(client: TestClient, fake_db, razorpay_keys):
    response = client.post(
        "/api/payments/verify-payment",
        json={
            "razorpay_order_id": "order_9",
            "razorpay_payment_id": "pay_9",
            "razorpay_signature": razorpay_signature("order_9", "pay_9", SECRET),
        },
    )
    assert response.json() == {"success": True, "payment": None}


def test_create_order_calls_gateway(client: TestClient, razorpay_keys):
    gateway = Mock()
    gateway.order.create.return_value = {"id": "order_abc", "amount": 50000, "currency": "INR"}

    with patch("core.razorpay_helpers.get_razorpay_client", return_value=gateway):
        response = client.post("/api/payments/create-order", json={"amount": 50000, "receipt": "b1"})

    assert response.status_code == 200
    assert response.json()["id"] == "order_abc"
    gateway.order.create.assert_called_once_with(
        data={"amount": 50000, "currency": "INR", "payment_capture": 1, "receipt": "b1"}
    )


def test_create_order_gateway_error(client: TestClient, razorpay_keys):
    gateway = Mock()
    gateway.order.create.side_effect = Exception("upstream timeout")

    with patch("core.razorpay_helpers.get_razorpay_client", return_value=gateway):
        response = client.post("/api/payments/create-order", json={"amount": 100})

    assert response.status_code == 502


def test_create_order_without_keys(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "RAZORPAY_KEY_ID", None)

    response = client.post("/api/payments/create-order", json={"amount": 100})

    assert response.status_code == 500
    assert response.json()["message"] == "Razorpay keys not configured"


def test_payment_amount_must_be_positive(client: TestClient, fake_db):
    response = client.post(
        "/api/payments",
        json={"tenant_id": "t1", "property_id": "p1", "booking_id": "b1", "amount": 0},
    )
    assert response.status_code == 400


def test_owner_cannot_record_payments(client: TestClient, fake_db, auth_header):
    response = client.post(
        "/api/payments",
        json={"tenant_id": "t1", "property_id": "p1", "booking_id": "b1", "amount": 10},
        headers=auth_header("o1", "owner"),
    )
    assert response.status_code == 403


def test_payments_filtered_by_status(client: TestClient, fake_db):
    fake_db.seed("payments", tenant_id="t1", property_id="p1", booking_id="b1", amount=100, status="pending")
    fake_db.seed("payments", tenant_id="t1", property_id="p1", booking_id="b2", amount=200, status="completed")

    pending = client.get("/api/payments", params={"status": "pending"}).json()
    assert [p["booking_id"] for p in pending] == ["b1"]

    completed = client.get("/api/payments", params={"tenant_id": "t1", "status": "completed"}).json()
    assert [p["amount"] for p in completed] == [200]
