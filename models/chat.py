# models/chat.py

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageCreate(BaseModel):
    """A chat line. Sender fields default from the session when a token is sent."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1, description="Message text")
    sender_id: Optional[str] = Field(None, alias="senderId")
    sender_name: Optional[str] = Field(None, alias="senderName")
    sender_role: Optional[str] = Field(None, alias="senderRole")


class MessageRead(BaseModel):
    id: str
    room_code: Optional[str] = None
    sender_id: str
    sender_name: Optional[str] = None
    sender_role: Optional[str] = None
    message: str
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)


class RoomMemberRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")


class RoomRead(BaseModel):
    id: str
    code: str
    owner_id: str
    members: List[str] = []
    created_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("members", mode="before")
    def none_to_list(cls, v):
        return v or []


class JoinRoomResponse(BaseModel):
    joined: bool
    room: Optional[RoomRead] = None
