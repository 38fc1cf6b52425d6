# models/user.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .enums import Role


def _normalize_email(v):
    if isinstance(v, str):
        return v.strip().lower()
    return v


# ===============================================================
# USER PROFILE MODELS (users table)
# ===============================================================

class UserBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return _normalize_email(v)


class UserCreate(UserBase):
    """Admin-side creation. The password is hashed before storage."""
    password: str = Field(..., min_length=6)


class SignupRequest(UserCreate):
    role: Role = Role.tenant


class UserUpdate(BaseModel):
    """Partial profile edit. Role changes go through /api/user-roles."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return _normalize_email(v)


class UserRead(BaseModel):
    """
    Returned to API consumers. Never carries the password hash.
    `role` is filled from user_roles when listing.
    """
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Optional[Role] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)


class LoginRequest(BaseModel):
    email: str
    password: str


# ===============================================================
# SESSION
# ===============================================================

class SessionUser(BaseModel):
    """A user profile merged with its role record."""
    model_config = ConfigDict(populate_by_name=True)

    uid: str
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")


class SessionResponse(BaseModel):
    user: SessionUser
    access_token: str
    token_type: str = "bearer"
