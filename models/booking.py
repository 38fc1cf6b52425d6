# models/booking.py

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import BookingStatus


class BookingCreate(BaseModel):
    """
    Sent by a tenant. total_price is computed from the property's
    rent when omitted.
    """
    tenant_id: str = Field(..., min_length=1)
    property_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    status: BookingStatus = BookingStatus.pending
    total_price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class BookingUpdate(BaseModel):
    """Owner confirms/rejects, tenant cancels; dates may be moved."""
    status: Optional[BookingStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class BookingRead(BaseModel):
    id: str
    tenant_id: str
    property_id: str
    start_date: date
    end_date: date
    status: BookingStatus
    total_price: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)
