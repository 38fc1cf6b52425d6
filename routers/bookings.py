# routers/bookings.py

from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from core.logging_config import logger
from core.supabase_helpers import (
    delete_record_or_404,
    get_record_or_404,
    safe_insert,
    safe_select,
    update_record_or_404,
)
from core.utils import now_iso
from dependencies.auth import CurrentUser, requires_permission, resolve_acting_user
from models.booking import BookingCreate, BookingRead, BookingUpdate
from models.enums import BookingStatus
from services.bookings import apply_date_change, compute_booking_total, list_scoped

router = APIRouter(
    prefix="/api/bookings",
    tags=["Bookings"],
)


# -----------------------------------------------------
# LIST: tenant_id / property_id / owner_id / status
# -----------------------------------------------------
@router.get("", response_model=List[BookingRead], summary="List bookings")
def list_bookings(
    tenant_id: Optional[str] = None,
    property_id: Optional[str] = None,
    owner_id: Optional[str] = None,
    status: Optional[BookingStatus] = None,
):
    return list_scoped("bookings", tenant_id, property_id, owner_id, status=status.value if status else None)


@router.get("/{booking_id}", response_model=BookingRead, summary="Get booking")
def get_booking(booking_id: str):
    return get_record_or_404("bookings", booking_id, "Booking")


# -----------------------------------------------------
# CREATE: price quoted from the property when omitted
# -----------------------------------------------------
@router.post("", response_model=BookingRead, status_code=201, summary="Create booking")
def create_booking(
    payload: BookingCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("bookings:write")),
):
    resolve_acting_user(payload.tenant_id, current_user)

    prop = safe_select("properties", {"id": payload.property_id}, single=True)
    if not prop:
        raise HTTPException(400, "Property not found")

    data = payload.model_dump(mode="json")
    if data.get("total_price") is None and prop.get("rent_price") is not None:
        data["total_price"] = compute_booking_total(
            payload.start_date, payload.end_date, float(prop["rent_price"])
        )

    booking = safe_insert("bookings", data)
    logger.info(
        f"Booking {booking['id']} created for property {payload.property_id} "
        f"by {payload.tenant_id} ({data.get('total_price')})"
    )
    return booking


@router.put("/{booking_id}", response_model=BookingRead, summary="Update booking")
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("bookings:write")),
):
    booking = get_record_or_404("bookings", booking_id, "Booking")
    update_data = payload.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        return booking

    update_data = apply_date_change(booking, update_data)
    update_data["updated_at"] = now_iso()
    return update_record_or_404("bookings", booking_id, update_data, "Booking")


@router.delete("/{booking_id}", summary="Delete booking")
def delete_booking(
    booking_id: str,
    current_user: Optional[CurrentUser] = Depends(requires_permission("bookings:write")),
):
    delete_record_or_404("bookings", booking_id, "Booking")
    return {"message": "Booking deleted"}
