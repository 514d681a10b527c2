"""External identity and auth provider models."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ProviderType(str, Enum):
    """Auth provider protocols."""
    OAUTH2 = "oauth2"
    SAML = "saml"


class AuthProvider(BaseModel):
    """A configured external login provider."""

    id: int
    key: str
    name: str
    type: ProviderType
    enabled: bool = True
    config: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class UserIdentityCreate(BaseModel):
    """Model for linking an external identity to a user."""

    user_id: UUID
    provider_id: int
    provider_user_id: str
    email: str | None = None
    profile: dict[str, Any] | None = None


class UserIdentity(UserIdentityCreate):
    """A stored external identity."""

    id: UUID
    created_at: datetime


class UserIdentityWithProvider(UserIdentity):
    """Identity joined with its provider's key and display name."""

    provider_key: str
    provider_name: str
