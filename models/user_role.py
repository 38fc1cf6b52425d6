# models/user_role.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from .enums import Role


class UserRoleUpsert(BaseModel):
    """Accepts the legacy camelCase body: {userId, role, assignedBy}."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    role: Role
    assigned_by: Optional[str] = Field("admin", alias="assignedBy")


class UserRoleRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    role: Role
    assigned_at: Optional[datetime] = Field(None, alias="assignedAt")
    assigned_by: Optional[str] = Field(None, alias="assignedBy")


class RoleMigrationResult(BaseModel):
    migrated: int
    skipped: int
    errors: int
