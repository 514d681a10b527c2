"""Request dependencies shared by the API routes."""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import Header, Query, Request

from ..core.config import settings
from ..db import get_executor
from ..db.repositories import UserRepository
from ..models.common import PaginationRequest
from ..services import ChatService, HashtagService


def get_pagination(
    page: Annotated[int | None, Query()] = None,
    limit: Annotated[int | None, Query()] = None,
    sort: Annotated[str | None, Query(max_length=64)] = None,
    order: Annotated[Literal["asc", "desc", "ASC", "DESC"] | None, Query()] = None,
) -> PaginationRequest:
    """Parse pagination query parameters; out-of-range values are clamped later."""
    return PaginationRequest(page=page, limit=limit, sort=sort, order=order)


def get_base_url(request: Request) -> str:
    """Request URL without its query string, rebased on PUBLIC_BASE_URL if set."""
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/") + request.url.path
    return str(request.url.replace(query=""))


def get_current_user_id(x_user_id: Annotated[UUID, Header()]) -> UUID:
    """Caller identity as forwarded by the authentication gateway."""
    return x_user_id


def get_user_repository() -> UserRepository:
    return UserRepository(get_executor())


def get_hashtag_service() -> HashtagService:
    return HashtagService()


def get_chat_service() -> ChatService:
    return ChatService()
