# routers/properties.py

from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from core.logging_config import logger
from core.permission_helpers import is_admin
from core.supabase_helpers import (
    delete_record_or_404,
    get_record_or_404,
    safe_insert,
    safe_select,
    update_record_or_404,
)
from dependencies.auth import CurrentUser, requires_permission
from models.enums import PropertyStatus
from models.property import PropertyCreate, PropertyRead, PropertyUpdate

router = APIRouter(
    prefix="/api/properties",
    tags=["Properties"],
)


# -----------------------------------------------------
# Owners may only touch their own listings
# -----------------------------------------------------
def verify_property_owner(prop: dict, current_user: Optional[CurrentUser]):
    if current_user and not is_admin(current_user) and prop.get("owner_id") != current_user.id:
        raise HTTPException(403, "You do not own this property.")


@router.get("", response_model=List[PropertyRead], summary="List properties")
def list_properties(
    owner_id: Optional[str] = None,
    status: Optional[PropertyStatus] = None,
    available: Optional[bool] = None,
):
    filters = {}
    if owner_id:
        filters["owner_id"] = owner_id
    if status:
        filters["status"] = status.value
    if available is not None:
        filters["available"] = available
    return safe_select("properties", filters, order_by="created_at", desc=True)


@router.get("/{property_id}", response_model=PropertyRead, summary="Get property")
def get_property(property_id: str):
    return get_record_or_404("properties", property_id, "Property")


@router.post("", response_model=PropertyRead, status_code=201, summary="Create property")
def create_property(
    payload: PropertyCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("properties:write")),
):
    if current_user and not is_admin(current_user) and payload.owner_id != current_user.id:
        raise HTTPException(403, "Owners can only list their own properties.")

    if not safe_select("users", {"id": payload.owner_id}, single=True):
        raise HTTPException(400, "Owner not found")

    prop = safe_insert("properties", payload.model_dump(mode="json"))
    logger.info(f"Property {prop['id']} listed by {payload.owner_id}")
    return prop


@router.put("/{property_id}", response_model=PropertyRead, summary="Update property")
def update_property(
    property_id: str,
    payload: PropertyUpdate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("properties:write")),
):
    verify_property_owner(get_record_or_404("properties", property_id, "Property"), current_user)
    update_data = payload.model_dump(mode="json", exclude_unset=True)
    return update_record_or_404("properties", property_id, update_data, "Property")


@router.delete("/{property_id}", summary="Delete property")
def delete_property(
    property_id: str,
    current_user: Optional[CurrentUser] = Depends(requires_permission("properties:write")),
):
    """
    Hard delete. Bookings, issues and payments that reference the
    property are left as they are.
    """
    verify_property_owner(get_record_or_404("properties", property_id, "Property"), current_user)
    delete_record_or_404("properties", property_id, "Property")
    return {"message": "Property deleted"}
