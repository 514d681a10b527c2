"""User models."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class Gender(str, Enum):
    """Gender values accepted by the users table."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class SexualOrientation(str, Enum):
    """Sexual orientation values accepted by the users table."""
    HETEROSEXUAL = "heterosexual"
    HOMOSEXUAL = "homosexual"
    BISEXUAL = "bisexual"


class UserBase(BaseModel):
    """Profile fields shared by create and read models."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=255)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    age: int | None = Field(None, ge=18, le=120)
    bio: str | None = None
    gender: Gender | None = None
    sexual_orientation: SexualOrientation | None = None
    location_manual: bool = False


class UserCreate(UserBase):
    """Model for registering a new user (password already hashed)."""

    password: str


class UserUpdate(BaseModel):
    """Model for updating a user profile."""

    username: str | None = Field(None, min_length=1, max_length=50)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    age: int | None = Field(None, ge=18, le=120)
    bio: str | None = None
    gender: Gender | None = None
    sexual_orientation: SexualOrientation | None = None
    location_manual: bool | None = None


class UserPublic(BaseModel):
    """User fields safe to return to other users."""

    id: UUID
    username: str
    first_name: str
    last_name: str
    age: int | None = None
    bio: str | None = None
    gender: Gender | None = None
    sexual_orientation: SexualOrientation | None = None
    fame_rating: float = 0.0
    online_status: bool = False
    last_seen: datetime | None = None


class User(UserPublic):
    """Full user row."""

    email: str
    password: str | None = None
    activated: bool = False
    profile_complete: bool = False
    location: Any = None
    location_manual: bool = False
    likes_received_count: int = 0
    matches_count: int = 0
    email_verified_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserSearchCriteria(BaseModel):
    """Filters for discovering users."""

    age_min: int | None = None
    age_max: int | None = None
    gender: Gender | None = None
    sexual_orientation: SexualOrientation | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    radius_km: float = Field(default=50, gt=0)
    limit: int | None = Field(None, ge=1, le=100)
    offset: int | None = Field(None, ge=0)


class UserSummary(BaseModel):
    """User fields embedded in like, match and block listings."""

    id: UUID
    username: str
    first_name: str
    last_name: str
    bio: str | None = None
    fame_rating: float = 0.0
    last_seen: datetime | None = None
    online_status: bool = False
