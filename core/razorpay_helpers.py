# core/razorpay_helpers.py

from typing import Optional

import razorpay
from fastapi import HTTPException
from razorpay.errors import SignatureVerificationError

from core.config import settings
from core.logging_config import logger


def get_razorpay_client() -> razorpay.Client:
    """Get a Razorpay client authenticated with the server key pair."""
    if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
        raise HTTPException(500, "Razorpay keys not configured")

    return razorpay.Client(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))


def create_order(amount: int, currency: str = "INR", receipt: Optional[str] = None) -> dict:
    """
    Create a Razorpay order.

    Args:
        amount: amount in paise
        currency: ISO currency code
        receipt: optional merchant reference
    """
    client = get_razorpay_client()

    order_data = {"amount": amount, "currency": currency, "payment_capture": 1}
    if receipt:
        order_data["receipt"] = receipt

    try:
        order = client.order.create(data=order_data)
    except Exception as e:
        logger.error(f"Razorpay order creation failed: {e}")
        raise HTTPException(502, "Payment gateway error")

    logger.info(f"Razorpay order {order.get('id')} created for {amount} {currency}")
    return order


def verify_payment_signature(order_id: str, payment_id: str, signature: str) -> bool:
    """
    Check the checkout callback signature with the SDK utility
    (HMAC-SHA256 of "order_id|payment_id" keyed with the server secret).
    """
    client = get_razorpay_client()

    try:
        client.utility.verify_payment_signature({
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": signature,
        })
    except SignatureVerificationError:
        logger.warning(f"Razorpay signature mismatch for order {order_id}, payment {payment_id}")
        return False

    return True
