"""Matcha API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..db.repositories import UserRepository
from ..models.chat import ChatMessage
from ..models.common import APIResponse, PaginatedResponse, PaginationRequest
from ..models.hashtag import Hashtag, UserHashtag
from ..models.user import UserPublic
from ..services import ChatService, HashtagService
from .deps import (
    get_base_url,
    get_chat_service,
    get_current_user_id,
    get_hashtag_service,
    get_pagination,
    get_user_repository,
)

router = APIRouter(prefix="/api", tags=["matcha"])

Pagination = Annotated[PaginationRequest, Depends(get_pagination)]
BaseUrl = Annotated[str, Depends(get_base_url)]


# ============================================
# User endpoints
# ============================================

@router.get("/users", response_model=PaginatedResponse[UserPublic])
async def list_users(
    pagination: Pagination,
    base_url: BaseUrl,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> PaginatedResponse[UserPublic]:
    """List users with pagination."""
    return await users.list_public(pagination, base_url)


# ============================================
# Hashtag endpoints
# ============================================

@router.get("/hashtags/search", response_model=PaginatedResponse[Hashtag])
async def search_hashtags(
    pagination: Pagination,
    base_url: BaseUrl,
    hashtags: Annotated[HashtagService, Depends(get_hashtag_service)],
    keyword: Annotated[str, Query(max_length=50)] = "",
) -> PaginatedResponse[Hashtag]:
    """Search hashtags by keyword."""
    return await hashtags.search(keyword, pagination, base_url)


@router.get("/users/{user_id}/hashtags", response_model=APIResponse[list[Hashtag]])
async def get_user_hashtags(
    user_id: UUID,
    hashtags: Annotated[HashtagService, Depends(get_hashtag_service)],
) -> APIResponse[list[Hashtag]]:
    """Get the hashtags on a user's profile."""
    return APIResponse(data=await hashtags.get_user_hashtags(user_id))


@router.post(
    "/users/{user_id}/hashtags/{hashtag_id}",
    response_model=APIResponse[UserHashtag],
    status_code=status.HTTP_201_CREATED,
)
async def add_user_hashtag(
    user_id: UUID,
    hashtag_id: UUID,
    hashtags: Annotated[HashtagService, Depends(get_hashtag_service)],
) -> APIResponse[UserHashtag]:
    """Attach a hashtag to a user's profile."""
    link = await hashtags.add(user_id, hashtag_id)
    return APIResponse(data=link, message="Hashtag added")


@router.delete("/users/{user_id}/hashtags/{hashtag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user_hashtag(
    user_id: UUID,
    hashtag_id: UUID,
    hashtags: Annotated[HashtagService, Depends(get_hashtag_service)],
) -> None:
    """Detach a hashtag from a user's profile."""
    if not await hashtags.remove(user_id, hashtag_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Hashtag {hashtag_id} is not on user {user_id}",
        )


# ============================================
# Chat endpoints
# ============================================

@router.get("/chat/rooms/{room_id}/messages", response_model=PaginatedResponse[ChatMessage])
async def get_chat_messages(
    room_id: UUID,
    pagination: Pagination,
    base_url: BaseUrl,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    chat: Annotated[ChatService, Depends(get_chat_service)],
) -> PaginatedResponse[ChatMessage]:
    """Get messages of a chat room the caller takes part in."""
    try:
        messages = await chat.get_chat_messages(room_id, user_id, pagination, base_url)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if messages is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chat room {room_id} not found",
        )
    return messages
