# models/property.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .enums import PropertyStatus


class PropertyBase(BaseModel):
    owner_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    location: str = Field(..., min_length=1)
    rent_price: float = Field(..., ge=0)
    type: Optional[str] = Field(None, description="e.g. Apartment, House")
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    amenities: List[str] = []
    images: List[str] = []
    available: bool = True
    status: PropertyStatus = PropertyStatus.active


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    rent_price: Optional[float] = Field(None, ge=0)
    type: Optional[str] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    available: Optional[bool] = None
    status: Optional[PropertyStatus] = None


class PropertyRead(PropertyBase):
    id: str
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("amenities", "images", mode="before")
    def none_to_list(cls, v):
        return v or []
