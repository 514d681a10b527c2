"""Hashtag service for business logic."""

from uuid import UUID

from ..db import QueryExecutor, get_executor
from ..db.repositories import HashtagRepository
from ..models.common import PaginatedResponse, PaginationRequest
from ..models.hashtag import Hashtag, UserHashtag


class HashtagService:
    """Service for hashtag operations."""

    def __init__(self, executor: QueryExecutor | None = None) -> None:
        self.hashtags = HashtagRepository(executor or get_executor())

    async def get_user_hashtags(self, user_id: UUID) -> list[Hashtag]:
        return await self.hashtags.find_for_user(user_id)

    async def search(
        self, keyword: str, pagination: PaginationRequest, base_url: str
    ) -> PaginatedResponse[Hashtag]:
        """Search hashtags by keyword; a blank keyword lists every hashtag."""
        keyword = keyword.strip().lstrip("#")
        if not keyword:
            return await self.hashtags.rows.find_all_paginated(pagination, base_url)
        return await self.hashtags.search_by_keyword(keyword, pagination, base_url)

    async def add(self, user_id: UUID, hashtag_id: UUID) -> UserHashtag:
        return await self.hashtags.add_to_user(user_id, hashtag_id)

    async def remove(self, user_id: UUID, hashtag_id: UUID) -> bool:
        return await self.hashtags.remove_from_user(user_id, hashtag_id)
