# services/chat_rooms.py

"""
Invite-coded chat rooms.

Codes are six characters from A-Z0-9, drawn with `secrets` and redrawn
until they do not collide with an existing room. Leaving a room never
deletes it; the scheduled sweep removes rooms that have been empty and
idle for longer than CHAT_ROOM_IDLE_TTL_HOURS.
"""

import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException

from core.config import settings
from core.logging_config import logger
from core.supabase_helpers import (
    compare_and_set,
    safe_delete,
    safe_insert,
    safe_select,
)
from core.utils import now_iso, parse_timestamp

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 20


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


def generate_room_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def get_room(code: str) -> Optional[dict]:
    return safe_select("chat_rooms", {"code": normalize_code(code)}, single=True)


def create_room(owner_id: str) -> dict:
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_room_code()
        if get_room(code) is None:
            break
    else:
        raise HTTPException(503, "Could not allocate a room code")

    stamp = now_iso()
    room = safe_insert(
        "chat_rooms",
        {
            "code": code,
            "owner_id": owner_id,
            "members": [owner_id],
            "last_active_at": stamp,
            "version": 0,
        },
    )
    logger.info(f"Chat room {code} created by {owner_id}")
    return room


def _update_members(code: str, change) -> Optional[dict]:
    """
    Apply `change(members) -> members` with a version check.
    Returns the updated room, the unchanged room if `change` was a no-op,
    or None if the room does not exist.
    """
    for attempt in range(1, settings.CONFLICT_RETRY_ATTEMPTS + 1):
        room = get_room(code)
        if room is None:
            return None

        members = list(room.get("members") or [])
        new_members = change(members)
        if new_members == members:
            return room

        updated = compare_and_set(
            "chat_rooms",
            room["id"],
            room.get("version") or 0,
            {"members": new_members, "last_active_at": now_iso()},
        )
        if updated:
            return updated

        logger.info(f"Chat room {room['code']} changed during membership update (attempt {attempt}); retrying")

    raise HTTPException(409, "Room is busy, please try again")


def join_room(code: str, user_id: str) -> bool:
    """False when no room has this code; joining twice is a no-op."""
    room = _update_members(code, lambda m: m if user_id in m else m + [user_id])
    return room is not None


def leave_room(code: str, user_id: str) -> Optional[dict]:
    return _update_members(code, lambda m: [u for u in m if u != user_id])


def require_member(room: dict, user_id: str):
    if user_id not in (room.get("members") or []):
        raise HTTPException(403, "Only room members can do this")


def evict_idle_rooms(now: datetime = None) -> int:
    """Delete empty rooms idle past the TTL, with their messages."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(hours=settings.CHAT_ROOM_IDLE_TTL_HOURS)

    evicted = 0
    for room in safe_select("chat_rooms"):
        if room.get("members"):
            continue
        last_active = parse_timestamp(room.get("last_active_at") or room.get("created_at"))
        if last_active and last_active > cutoff:
            continue

        # only if nobody joined since the read; a join bumps the version
        deleted = safe_delete("chat_rooms", {"id": room["id"], "version": room.get("version") or 0})
        if deleted is None:
            logger.info(f"Chat room {room['code']} changed during eviction; keeping it")
            continue

        safe_delete("chat_messages", {"room_code": room["code"]})
        evicted += 1
        logger.info(f"Evicted idle chat room {room['code']}")

    return evicted
