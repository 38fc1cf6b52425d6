# routers/chat.py

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from typing import List, Optional

from core.logging_config import logger
from core.supabase_helpers import safe_insert, safe_select, safe_update
from core.utils import now_iso
from dependencies.auth import CurrentUser, requires_permission, resolve_acting_user
from models.chat import JoinRoomResponse, MessageCreate, MessageRead, RoomMemberRequest, RoomRead
from services.chat_rooms import create_room, get_room, join_room, leave_room, require_member

router = APIRouter(
    prefix="/api/chat",
    tags=["Chat"],
)


def _room_or_404(code: str) -> dict:
    room = get_room(code)
    if not room:
        raise HTTPException(404, "Room not found")
    return room


def _message_row(payload: MessageCreate, current_user: Optional[CurrentUser], room_code: str = None) -> dict:
    sender_id = resolve_acting_user(payload.sender_id, current_user)
    return {
        "room_code": room_code,
        "sender_id": sender_id,
        "sender_name": payload.sender_name,
        "sender_role": current_user.role if current_user else payload.sender_role,
        "message": payload.message,
    }


# -----------------------------------------------------
# COMMUNITY CHAT (no room)
# -----------------------------------------------------
@router.get("/messages", response_model=List[MessageRead], summary="Community chat log (oldest first)")
def list_community_messages():
    return safe_select("chat_messages", null_fields=["room_code"], order_by="created_at")


@router.post("/messages", response_model=MessageRead, status_code=201, summary="Post to community chat")
def post_community_message(
    payload: MessageCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("community:write")),
):
    return safe_insert("chat_messages", _message_row(payload, current_user))


# -----------------------------------------------------
# ROOMS
# -----------------------------------------------------
@router.post("/rooms", response_model=RoomRead, status_code=201, summary="Create a room with an invite code")
def create_chat_room(
    payload: RoomMemberRequest,
    current_user: Optional[CurrentUser] = Depends(requires_permission("community:write")),
):
    owner_id = resolve_acting_user(payload.user_id, current_user)
    return create_room(owner_id)


@router.get("/rooms/{code}", response_model=RoomRead, summary="Get a room by invite code")
def get_chat_room(code: str):
    return _room_or_404(code)


@router.post("/rooms/{code}/join", response_model=JoinRoomResponse, summary="Join a room by invite code")
def join_chat_room(
    code: str,
    payload: RoomMemberRequest,
    current_user: Optional[CurrentUser] = Depends(requires_permission("community:write")),
):
    user_id = resolve_acting_user(payload.user_id, current_user)

    if not join_room(code, user_id):
        logger.info(f"Join attempt for unknown room code {code}")
        return JSONResponse(status_code=404, content={"joined": False, "message": "Room not found"})

    return JoinRoomResponse(joined=True, room=get_room(code))


@router.post("/rooms/{code}/leave", response_model=RoomRead, summary="Leave a room")
def leave_chat_room(
    code: str,
    payload: RoomMemberRequest,
    current_user: Optional[CurrentUser] = Depends(requires_permission("community:write")),
):
    user_id = resolve_acting_user(payload.user_id, current_user)
    room = leave_room(code, user_id)
    if room is None:
        raise HTTPException(404, "Room not found")
    return room


@router.get("/rooms/{code}/messages", response_model=List[MessageRead], summary="Room messages (oldest first)")
def list_room_messages(code: str):
    room = _room_or_404(code)
    return safe_select("chat_messages", {"room_code": room["code"]}, order_by="created_at")


@router.post("/rooms/{code}/messages", response_model=MessageRead, status_code=201, summary="Post to a room (members only)")
def post_room_message(
    code: str,
    payload: MessageCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("community:write")),
):
    room = _room_or_404(code)
    row = _message_row(payload, current_user, room_code=room["code"])
    require_member(room, row["sender_id"])

    message = safe_insert("chat_messages", row)
    safe_update("chat_rooms", {"id": room["id"]}, {"last_active_at": now_iso()})
    return message
