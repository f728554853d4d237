# backend/schemas/resource.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Base configuration for ORM compatibility; JSON uses camelCase, Python snake_case
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Shared attributes for every directory entry
class ResourceCreate(ORMBase):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    location: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    image: Optional[str] = None
    phone: Optional[str] = None


class AmbulanceCreate(ResourceCreate):
    pass


class DoctorCreate(ResourceCreate):
    specialization: Optional[str] = None


# Schema for partial updates - only fields present in the payload are applied
class ResourceUpdate(ORMBase):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    image: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("title", "description", "location", "latitude", "longitude")
    @classmethod
    def _not_null(cls, value):
        # Runs only for values supplied by the caller; defaults are not validated
        if value is None:
            raise ValueError("field is required and cannot be null")
        return value


class AmbulanceUpdate(ResourceUpdate):
    pass


class DoctorUpdate(ResourceUpdate):
    specialization: Optional[str] = None


# Full representation returned by the API
class ResourceOut(ORMBase):
    id: int
    title: str
    description: str
    location: str
    latitude: float
    longitude: float
    image: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AmbulanceOut(ResourceOut):
    pass


class DoctorOut(ResourceOut):
    specialization: Optional[str] = None


# Paginated listing envelope
class AmbulancePage(ORMBase):
    data: List[AmbulanceOut]
    total: int
    page: int
    limit: int
    total_pages: int


class DoctorPage(ORMBase):
    data: List[DoctorOut]
    total: int
    page: int
    limit: int
    total_pages: int
