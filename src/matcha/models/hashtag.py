"""Hashtag models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Hashtag(BaseModel):
    """An interest tag users attach to their profile."""

    id: UUID
    name: str = Field(..., min_length=1, max_length=50)
    created_at: datetime | None = None


class UserHashtag(BaseModel):
    """A user↔hashtag link."""

    user_id: UUID
    hashtag_id: UUID
    created_at: datetime | None = None
