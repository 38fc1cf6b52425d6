# routers/payments.py

from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from core.logging_config import logger
from core.razorpay_helpers import create_order, verify_payment_signature
from core.supabase_helpers import (
    delete_record_or_404,
    get_record_or_404,
    safe_insert,
    safe_update,
    update_record_or_404,
)
from core.utils import now_iso
from dependencies.auth import CurrentUser, requires_permission, resolve_acting_user
from models.enums import PaymentStatus
from models.payment import (
    CreateOrderRequest,
    PaymentCreate,
    PaymentRead,
    PaymentUpdate,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from services.bookings import list_scoped

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
)


# -----------------------------------------------------
# RAZORPAY CHECKOUT
# (declared before /{payment_id} so the paths are not captured)
# -----------------------------------------------------
@router.post("/create-order", summary="Create a Razorpay order")
def create_payment_order(
    payload: CreateOrderRequest,
    current_user: Optional[CurrentUser] = Depends(requires_permission("payments:write")),
):
    return create_order(payload.amount, payload.currency, payload.receipt)


@router.post("/verify-payment", response_model=VerifyPaymentResponse, summary="Verify checkout signature")
def verify_payment(
    payload: VerifyPaymentRequest,
    current_user: Optional[CurrentUser] = Depends(requires_permission("payments:write")),
):
    """
    Validates the signature Razorpay returns to the checkout form.

    With `payment_id`, the matching payment row is settled: `completed`
    plus the gateway ids on success, `failed` otherwise.
    """
    if payload.payment_id:
        get_record_or_404("payments", payload.payment_id, "Payment")

    valid = verify_payment_signature(
        payload.razorpay_order_id,
        payload.razorpay_payment_id,
        payload.razorpay_signature,
    )

    if not valid:
        if payload.payment_id:
            safe_update("payments", {"id": payload.payment_id}, {"status": PaymentStatus.failed.value})
        raise HTTPException(400, "Invalid signature")

    payment = None
    if payload.payment_id:
        payment = update_record_or_404(
            "payments",
            payload.payment_id,
            {
                "status": PaymentStatus.completed.value,
                "razorpay_payment_id": payload.razorpay_payment_id,
                "razorpay_order_id": payload.razorpay_order_id,
            },
            "Payment",
        )

    logger.info(f"Payment verified for order {payload.razorpay_order_id}")
    return VerifyPaymentResponse(success=True, payment=payment)


# -----------------------------------------------------
# CRUD
# -----------------------------------------------------
@router.get("", response_model=List[PaymentRead], summary="List payments")
def list_payments(
    tenant_id: Optional[str] = None,
    property_id: Optional[str] = None,
    owner_id: Optional[str] = None,
    status: Optional[PaymentStatus] = None,
):
    return list_scoped("payments", tenant_id, property_id, owner_id, status=status.value if status else None)


@router.get("/{payment_id}", response_model=PaymentRead, summary="Get payment")
def get_payment(payment_id: str):
    return get_record_or_404("payments", payment_id, "Payment")


@router.post("", response_model=PaymentRead, status_code=201, summary="Record a payment")
def create_payment(
    payload: PaymentCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("payments:write")),
):
    resolve_acting_user(payload.tenant_id, current_user)

    data = payload.model_dump(mode="json")
    data["date"] = now_iso()
    payment = safe_insert("payments", data)
    logger.info(f"Payment {payment['id']} recorded for booking {payload.booking_id}: {payload.amount}")
    return payment


@router.put("/{payment_id}", response_model=PaymentRead, summary="Update payment")
def update_payment(
    payment_id: str,
    payload: PaymentUpdate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("payments:write")),
):
    update_data = payload.model_dump(mode="json", exclude_unset=True)
    return update_record_or_404("payments", payment_id, update_data, "Payment")


@router.delete("/{payment_id}", summary="Delete payment")
def delete_payment(
    payment_id: str,
    current_user: Optional[CurrentUser] = Depends(requires_permission("payments:write")),
):
    delete_record_or_404("payments", payment_id, "Payment")
    return {"message": "Payment deleted"}
