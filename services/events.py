# services/events.py

from fastapi import HTTPException

from core.config import settings
from core.logging_config import logger
from core.supabase_helpers import compare_and_set, get_record_or_404


def upsert_rsvp(rsvps: list, user_id: str, status: str) -> list:
    """Overwrite the user's entry in place, or append a new one."""
    updated = [dict(r) for r in rsvps or []]
    for entry in updated:
        if entry.get("user_id") == user_id:
            entry["status"] = status
            return updated
    updated.append({"user_id": user_id, "status": status})
    return updated


def rsvp(event_id: str, user_id: str, status: str) -> dict:
    for attempt in range(1, settings.CONFLICT_RETRY_ATTEMPTS + 1):
        event = get_record_or_404("events", event_id, "Event")

        updated = compare_and_set(
            "events",
            event_id,
            event.get("version") or 0,
            {"rsvps": upsert_rsvp(event.get("rsvps"), user_id, status)},
        )
        if updated:
            return updated

        logger.info(f"Event {event_id} changed during RSVP (attempt {attempt}); retrying")

    raise HTTPException(409, "Event is busy, please try again")
