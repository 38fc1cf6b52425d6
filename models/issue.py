# models/issue.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .enums import IssueStatus, IssuePriority


class IssueCreate(BaseModel):
    tenant_id: str = Field(..., min_length=1)
    property_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    status: IssueStatus = IssueStatus.reported
    priority: IssuePriority = IssuePriority.medium
    attachments: List[str] = []


class IssueUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[IssueStatus] = None
    priority: Optional[IssuePriority] = None
    attachments: Optional[List[str]] = None


class IssueRead(IssueCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("attachments", mode="before")
    def none_to_list(cls, v):
        return v or []
