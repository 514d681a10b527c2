"""Hashtag repository."""

from uuid import UUID

from ...models.common import PaginatedResponse, PaginationRequest
from ...models.hashtag import Hashtag, UserHashtag
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig

HASHTAGS = EntityConfig(
    table_name="hashtags",
    columns=frozenset({"id", "name", "created_at"}),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_text_fields=frozenset({"name"}),
    default_order_by="name",
    default_order_direction="ASC",
    updated_at_column=None,
)

USER_HASHTAGS_TABLE = "user_hashtags"
HASHTAG_COLUMN = "hashtag_id"


class HashtagRepository:
    """Repository for hashtags and the user↔hashtag junction."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[Hashtag] = Repository(executor, HASHTAGS, Hashtag)

    async def find_for_user(self, user_id: UUID | str) -> list[Hashtag]:
        """Hashtags attached to a user's profile."""
        return await self.rows.find_by_user_id(user_id, USER_HASHTAGS_TABLE, HASHTAG_COLUMN)

    async def search_by_keyword(
        self,
        keyword: str,
        pagination: PaginationRequest,
        base_url: str,
    ) -> PaginatedResponse[Hashtag]:
        """Case-insensitive substring search on hashtag names.

        Links carry the keyword under its query parameter name, ``keyword``.
        """
        return await self.rows.search_paginated(
            {"name": keyword},
            pagination,
            base_url,
            text_fields=["name"],
            query_params={**pagination.to_query_params(), "keyword": keyword},
        )

    async def add_to_user(self, user_id: UUID | str, hashtag_id: UUID | str) -> UserHashtag:
        row = await self.rows.add_user_relationship(
            user_id, hashtag_id, USER_HASHTAGS_TABLE, HASHTAG_COLUMN
        )
        return UserHashtag(**row)

    async def remove_from_user(self, user_id: UUID | str, hashtag_id: UUID | str) -> bool:
        return await self.rows.remove_user_relationship(
            user_id, hashtag_id, USER_HASHTAGS_TABLE, HASHTAG_COLUMN
        )
