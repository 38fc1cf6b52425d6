# models/announcement.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .enums import AnnouncementType


class AnnouncementCreate(BaseModel):
    title: Optional[str] = None
    message: str = Field(..., min_length=1)
    type: AnnouncementType
    date: Optional[datetime] = None

    @field_validator("date", mode="before")
    def parse_date(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v


class AnnouncementRead(AnnouncementCreate):
    id: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)
