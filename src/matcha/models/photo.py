"""Profile photo models."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

ImageMimeType = Literal["image/jpeg", "image/png", "image/gif", "image/webp"]


class PhotoCreate(BaseModel):
    """Metadata of a stored photo file to record for a user."""

    filename: str = Field(..., min_length=1, max_length=255)
    original_filename: str | None = Field(None, max_length=255)
    file_path: str = Field(..., min_length=1)
    file_size: int | None = Field(None, ge=0)
    mime_type: ImageMimeType


class PhotoUpdate(BaseModel):
    """Model for updating photo metadata."""

    filename: str | None = Field(None, min_length=1, max_length=255)
    original_filename: str | None = Field(None, max_length=255)
    display_order: int | None = Field(None, ge=0)
    is_main: bool | None = None


class Photo(BaseModel):
    """A user's profile photo.

    Accepts raw ``user_photos`` rows (``file_path``, ``is_primary``,
    ``created_at``) as well as the public field names.
    """

    id: UUID
    user_id: UUID
    filename: str
    original_filename: str | None = None
    image_url: str = Field(validation_alias=AliasChoices("image_url", "file_path"))
    file_size: int | None = None
    mime_type: str
    is_main: bool = Field(default=False, validation_alias=AliasChoices("is_main", "is_primary"))
    display_order: int = 0
    uploaded_at: datetime = Field(validation_alias=AliasChoices("uploaded_at", "created_at"))

    @field_validator("image_url")
    @classmethod
    def absolute_path(cls, v: str) -> str:
        """Serve stored relative paths from the site root."""
        return v if v.startswith("/") else f"/{v}"
