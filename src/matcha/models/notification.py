"""Notification models."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class Notification(BaseModel):
    """A notification delivered to a user."""

    id: UUID
    user_id: UUID
    actor_id: UUID | None = None
    type: str
    read_at: datetime | None = None
    delivered_at: datetime | None = None
    status: str
    metadata: dict[str, Any] | None = None
    created_at: datetime
