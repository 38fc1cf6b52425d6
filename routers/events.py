# routers/events.py

from fastapi import APIRouter, Depends
from typing import List, Optional

from core.logging_config import logger
from core.supabase_helpers import delete_record_or_404, safe_insert, safe_select
from dependencies.auth import CurrentUser, get_optional_auth, requires_permission, resolve_acting_user
from models.event import EventCreate, EventRead, RsvpRequest
from services.events import rsvp

router = APIRouter(
    prefix="/api/events",
    tags=["Events"],
)


@router.get("", response_model=List[EventRead], summary="List community events")
def list_events():
    return safe_select("events", order_by="date", desc=True)


@router.post("", response_model=EventRead, status_code=201, summary="Create an event")
def create_event(
    payload: EventCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("events:write")),
):
    data = payload.model_dump(mode="json")
    data["rsvps"] = []
    data["version"] = 0
    data["created_by"] = current_user.id if current_user else None

    event = safe_insert("events", data)
    logger.info(f"Event {event['id']} created: {payload.title}")
    return event


@router.post("/{event_id}/rsvp", response_model=EventRead, summary="RSVP yes/no to an event")
def rsvp_event(
    event_id: str,
    payload: RsvpRequest,
    current_user: Optional[CurrentUser] = Depends(get_optional_auth),
):
    user_id = resolve_acting_user(payload.user_id, current_user)
    return rsvp(event_id, user_id, payload.status.value)


@router.delete("/{event_id}", summary="Delete an event")
def delete_event(
    event_id: str,
    current_user: Optional[CurrentUser] = Depends(requires_permission("events:write")),
):
    delete_record_or_404("events", event_id, "Event")
    return {"message": "Event deleted"}
