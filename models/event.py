from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .enums import RsvpStatus


# -------------------------------------------------
# Shared Fields
# -------------------------------------------------
class EventBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime
    image: Optional[str] = None

    # -------------------------------------------------
    # Normalize timestamps like "2025-01-01T00:00:00Z"
    # -------------------------------------------------
    @field_validator("date", mode="before")
    def parse_date(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v


# -------------------------------------------------
# Create Event
# -------------------------------------------------
class EventCreate(EventBase):
    """
    Client sends this when creating an event.
    Supabase generates id & created_at; backend sets created_by and rsvps.
    """
    pass


class Rsvp(BaseModel):
    user_id: str
    status: RsvpStatus


class RsvpRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    status: RsvpStatus


# -------------------------------------------------
# Read Event
# -------------------------------------------------
class EventRead(EventBase):
    id: str
    rsvps: List[Rsvp] = []
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("rsvps", mode="before")
    def none_to_list(cls, v):
        return v or []

    @computed_field
    @property
    def attendee_count(self) -> int:
        return sum(1 for r in self.rsvps if r.status == RsvpStatus.yes)
