# routers/announcements.py

from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from core.logging_config import logger
from core.permission_helpers import is_admin
from core.supabase_helpers import delete_record_or_404, safe_insert, safe_select
from core.utils import now_iso
from dependencies.auth import CurrentUser, get_optional_auth, requires_permission
from models.announcement import AnnouncementCreate, AnnouncementRead

router = APIRouter(
    prefix="/api/announcements",
    tags=["Announcements"],
)


@router.get("", response_model=List[AnnouncementRead], summary="List announcements (newest first)")
def list_announcements():
    return safe_select("announcements", order_by="date", desc=True)


@router.post("", response_model=AnnouncementRead, status_code=201, summary="Post an announcement")
def create_announcement(
    payload: AnnouncementCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("announcements:write")),
):
    data = payload.model_dump(mode="json")
    data["date"] = data.get("date") or now_iso()
    data["created_by"] = current_user.id if current_user else None

    announcement = safe_insert("announcements", data)
    logger.info(f"Announcement {announcement['id']} posted ({payload.type})")
    return announcement


@router.delete("/{announcement_id}", summary="Delete an announcement")
def delete_announcement(
    announcement_id: str,
    current_user: Optional[CurrentUser] = Depends(get_optional_auth),
):
    # Moderation: with a session only admins may delete
    if current_user and not is_admin(current_user):
        raise HTTPException(403, "Admin role required")

    delete_record_or_404("announcements", announcement_id, "Announcement")
    return {"message": "Announcement deleted"}
