# models/payment.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .enums import PaymentStatus


class PaymentCreate(BaseModel):
    tenant_id: str = Field(..., min_length=1)
    property_id: str = Field(..., min_length=1)
    booking_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    status: PaymentStatus = PaymentStatus.pending
    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None


class PaymentUpdate(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    status: Optional[PaymentStatus] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None


class PaymentRead(PaymentCreate):
    id: str
    date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)


# -------------------------------------------------
# Razorpay checkout
# -------------------------------------------------
class CreateOrderRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Amount in the smallest currency unit (paise)")
    currency: str = "INR"
    receipt: Optional[str] = None


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
    payment_id: Optional[str] = Field(None, description="RentEazy payment row to settle")


class VerifyPaymentResponse(BaseModel):
    success: bool
    payment: Optional[PaymentRead] = None
