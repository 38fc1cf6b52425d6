# services/bookings.py

import math
from datetime import date

from fastapi import HTTPException

from core.supabase_helpers import safe_select, select_ids

DAYS_PER_BILLING_MONTH = 30


def billable_months(start_date: date, end_date: date) -> int:
    """Started 30-day blocks, never fewer than one."""
    days = (end_date - start_date).days
    return max(1, math.ceil(days / DAYS_PER_BILLING_MONTH))


def compute_booking_total(start_date: date, end_date: date, rent_price: float) -> float:
    return rent_price * billable_months(start_date, end_date)


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def apply_date_change(booking: dict, update_data: dict) -> dict:
    """
    Merge moved dates with the stored ones, reject an inverted range and
    re-quote the total unless the caller set one explicitly.
    """
    if "start_date" not in update_data and "end_date" not in update_data:
        return update_data

    start = _as_date(update_data.get("start_date") or booking["start_date"])
    end = _as_date(update_data.get("end_date") or booking["end_date"])
    if end <= start:
        raise HTTPException(400, "end_date must be after start_date")

    if update_data.get("total_price") is None:
        prop = safe_select("properties", {"id": booking["property_id"]}, single=True)
        if prop and prop.get("rent_price") is not None:
            update_data["total_price"] = compute_booking_total(start, end, float(prop["rent_price"]))

    return update_data


def owner_property_ids(owner_id: str) -> list:
    return select_ids("properties", {"owner_id": owner_id})


def list_scoped(
    table: str,
    tenant_id: str = None,
    property_id: str = None,
    owner_id: str = None,
    status: str = None,
    order_by: str = "created_at",
) -> list:
    """
    List bookings/issues/payments filtered by tenant, property, status, or
    the properties an owner holds.
    """
    filters = {}
    if tenant_id:
        filters["tenant_id"] = tenant_id
    if property_id:
        filters["property_id"] = property_id
    if status:
        filters["status"] = status

    in_filters = None
    if owner_id:
        ids = owner_property_ids(owner_id)
        if not ids:
            return []
        in_filters = {"property_id": ids}

    return safe_select(table, filters, in_filters=in_filters, order_by=order_by, desc=True)
