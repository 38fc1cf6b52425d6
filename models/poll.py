# models/poll.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PollCreate(BaseModel):
    """
    Votes always start at zero, one counter per option.
    A client-sent `votes` list is accepted for compatibility but must
    match the options and carry no counts.
    """
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    votes: Optional[List[int]] = None

    @field_validator("options")
    def options_not_blank(cls, v):
        cleaned = [o.strip() for o in v]
        if any(not o for o in cleaned):
            raise ValueError("poll options cannot be blank")
        return cleaned

    @field_validator("votes")
    def votes_start_at_zero(cls, v, info):
        if v is None:
            return v
        options = info.data.get("options")
        if options is not None and len(v) != len(options):
            raise ValueError("votes must have one entry per option")
        if any(count != 0 for count in v):
            raise ValueError("new polls cannot carry votes")
        return v


class VoteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    option_index: int = Field(..., alias="optionIndex", ge=0)
    user_id: Optional[str] = Field(None, alias="userId")


class PollRead(BaseModel):
    id: str
    question: str
    options: List[str]
    votes: List[int]
    voters: List[str] = []
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("voters", mode="before")
    def none_to_list(cls, v):
        return v or []
